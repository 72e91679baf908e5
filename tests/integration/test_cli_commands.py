"""Integration tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from tresor.cli.main import app
from tresor.storage import SqliteStorage


runner = CliRunner()


def invoke(db_path: Path, *args: str, input: str = None):
    """Run the CLI against a specific database."""
    return runner.invoke(app, ["--db", str(db_path), *args], input=input)


@pytest.fixture
def initialized_db(db_path: Path) -> Path:
    """Database path after 'init'."""
    result = invoke(db_path, "init")
    assert result.exit_code == 0
    return db_path


class TestInitCommand:
    """Tests for the init command."""

    def test_init_creates_database(self, db_path: Path):
        result = invoke(db_path, "init")

        assert result.exit_code == 0
        assert "initialized" in result.stdout.lower()
        assert db_path.exists()
        with SqliteStorage(db_path) as storage:
            assert storage.is_initialized()

    def test_init_idempotent(self, initialized_db: Path):
        result = invoke(initialized_db, "init")

        assert result.exit_code == 0
        assert "already initialized" in result.stdout.lower()

    def test_db_from_environment(self, db_path: Path, monkeypatch):
        monkeypatch.setenv("TRESOR_DB_PATH", str(db_path))

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert db_path.exists()

    @pytest.mark.parametrize("from_env", [True, False])
    def test_db_path_expands_home(self, tmp_path: Path, monkeypatch, from_env):
        """A '~' in the database path points into the home directory."""
        home = tmp_path / "home"
        workdir = tmp_path / "work"
        home.mkdir()
        workdir.mkdir()
        monkeypatch.setenv("HOME", str(home))
        monkeypatch.chdir(workdir)

        if from_env:
            monkeypatch.setenv("TRESOR_DB_PATH", "~/vault.db")
            result = runner.invoke(app, ["init"])
        else:
            result = runner.invoke(app, ["--db", "~/vault.db", "init"])

        assert result.exit_code == 0
        assert (home / "vault.db").exists()
        assert not (workdir / "~").exists()

    def test_malformed_settings_file(self, db_path: Path, tmp_path: Path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("db_path: [unclosed\n")
        monkeypatch.setenv("TRESOR_CONFIG", str(config_file))

        result = invoke(db_path, "init")

        assert result.exit_code == 1
        assert "Invalid settings file" in result.stdout
        assert not db_path.exists()


class TestUninitialized:
    """Commands against a missing store."""

    @pytest.mark.parametrize(
        "args",
        [
            ("store", "b", "k", "v"),
            ("get", "b", "k"),
            ("delete", "b", "k"),
            ("buckets",),
            ("keys", "b"),
        ],
    )
    def test_requires_init(self, db_path: Path, args):
        result = invoke(db_path, *args)

        assert result.exit_code == 1
        assert "tresor init" in result.stdout


class TestStoreAndGet:
    """Tests for store/get/delete."""

    def test_store_then_get(self, initialized_db: Path):
        result = invoke(initialized_db, "store", "b", "k", "secret", input="pw1\n")
        assert result.exit_code == 0
        assert "Stored" in result.stdout

        result = invoke(initialized_db, "get", "b", "k", input="pw1\n")
        assert result.exit_code == 0
        assert result.stdout.strip().endswith("secret")

    def test_value_never_stored_in_plaintext(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "secret", input="pw1\n")

        with SqliteStorage(initialized_db) as storage:
            assert storage.lookup("b", "k").value != "secret"

    def test_password_is_not_echoed(self, initialized_db: Path):
        result = invoke(initialized_db, "store", "b", "k", "secret", input="pw1\n")

        assert "pw1" not in result.stdout

    def test_get_wrong_password(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "secret", input="pw1\n")

        result = invoke(initialized_db, "get", "b", "k", input="pw2\n")

        assert result.exit_code == 1
        assert "Decryption error" in result.stdout
        assert "secret" not in result.stdout

    def test_get_missing_key(self, initialized_db: Path):
        result = invoke(initialized_db, "get", "b", "k")

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_overwrite_with_wrong_password_refused(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "v1", input="pw1\n")

        result = invoke(initialized_db, "store", "b", "k", "v2", input="typo\n")
        assert result.exit_code == 1

        result = invoke(initialized_db, "get", "b", "k", input="pw1\n")
        assert result.stdout.strip().endswith("v1")

    def test_overwrite_with_new_password(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "v1", input="pw1\n")

        result = invoke(initialized_db, "store", "b", "k", "v2", input="pw1\npw2\n")
        assert result.exit_code == 0

        result = invoke(initialized_db, "get", "b", "k", input="pw2\n")
        assert result.stdout.strip().endswith("v2")

    def test_password_too_long(self, initialized_db: Path):
        result = invoke(initialized_db, "store", "b", "k", "v", input="p" * 33 + "\n")

        assert result.exit_code == 1
        assert "shorter password" in result.stdout

    def test_delete(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "secret", input="pw1\n")

        result = invoke(initialized_db, "delete", "b", "k", input="pw1\n")
        assert result.exit_code == 0
        assert "Deleted" in result.stdout

        result = invoke(initialized_db, "get", "b", "k")
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_delete_wrong_password_keeps_value(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "secret", input="pw1\n")

        result = invoke(initialized_db, "delete", "b", "k", input="nope\n")
        assert result.exit_code == 1

        with SqliteStorage(initialized_db) as storage:
            assert storage.lookup("b", "k") is not None


class TestListing:
    """Tests for buckets and keys."""

    def test_buckets_empty(self, initialized_db: Path):
        result = invoke(initialized_db, "buckets")

        assert result.exit_code == 0
        assert "No buckets" in result.stdout

    def test_buckets_sorted(self, initialized_db: Path):
        for bucket in ("b3", "b1", "b2"):
            invoke(initialized_db, "store", bucket, "k", "v", input="pw\n")

        result = invoke(initialized_db, "buckets")

        assert result.exit_code == 0
        assert result.stdout.split() == ["b1", "b2", "b3"]

    def test_keys_masks_other_passwords(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "mine", "visible", input="pw1\n")
        invoke(initialized_db, "store", "b", "theirs", "hidden", input="pw2\n")

        result = invoke(initialized_db, "keys", "b", input="pw1\n")

        assert result.exit_code == 0
        assert "visible" in result.stdout
        assert "hidden" not in result.stdout
        assert "********" in result.stdout

    def test_keys_empty_bucket(self, initialized_db: Path):
        result = invoke(initialized_db, "keys", "nothing")

        assert result.exit_code == 0
        assert "no entries" in result.stdout


class TestResetCommand:
    """Tests for the reset command."""

    def test_reset_with_confirmation(self, initialized_db: Path):
        invoke(initialized_db, "store", "b", "k", "v", input="pw\n")

        result = invoke(initialized_db, "reset", input="y\n")

        assert result.exit_code == 0
        with SqliteStorage(initialized_db) as storage:
            assert not storage.is_initialized()

    def test_reset_aborted(self, initialized_db: Path):
        result = invoke(initialized_db, "reset", input="n\n")

        assert result.exit_code == 1
        with SqliteStorage(initialized_db) as storage:
            assert storage.is_initialized()

    def test_reset_missing_database(self, db_path: Path):
        result = invoke(db_path, "reset", "--yes")

        assert result.exit_code == 0
        assert not db_path.exists()


class TestVersionCommand:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "Tresor v" in result.stdout
