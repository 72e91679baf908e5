"""Tresor CLI - store your stuff safely."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..config.settings import get_settings
from ..storage import SqliteStorage, StorageError
from ..utils.logging import setup_logging
from ..vault import VaultError, VaultManager

app = typer.Typer(
    name="tresor",
    help="Tresor - store your stuff safely.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def cli_options(
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        envvar="TRESOR_DB_PATH",
        help="Database file (default: ~/.tresor/tresor.db)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
):
    """
    Tresor keeps values in buckets, each encrypted under its own password.

    Passwords are always asked for interactively.
    """
    try:
        settings = get_settings()
    except ValueError as e:
        _fail(str(e))
    if db is not None:
        settings.storage.db_path = db.expanduser()

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
    )


def ask_password(message: str) -> str:
    """Read a password from the terminal without echoing it."""
    return typer.prompt(message, hide_input=True)


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def _open_storage() -> SqliteStorage:
    """Open the configured store, requiring it to be initialized."""
    db_path = get_settings().storage.db_path
    storage = SqliteStorage(db_path)
    try:
        initialized = storage.is_initialized()
    except StorageError as e:
        storage.close()
        _fail(str(e))
    if not initialized:
        storage.close()
        _fail(f"Vault not initialized at {db_path}. Run 'tresor init' first.")
    return storage


def _open_vault(storage: SqliteStorage) -> VaultManager:
    return VaultManager(
        storage,
        prompt=ask_password,
        masked_value=get_settings().display.masked_value,
    )


def _format_timestamp(timestamp: Optional[int]) -> str:
    if timestamp is None:
        return "-"
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


@app.command()
def init():
    """
    Initialize a new vault.

    Creates the database and its entries table if they don't exist.
    """
    db_path = get_settings().storage.db_path

    with SqliteStorage(db_path) as storage:
        try:
            if storage.is_initialized():
                console.print(f"Vault already initialized at {db_path}", soft_wrap=True)
                return
            storage.create_schema()
        except StorageError as e:
            _fail(str(e))

    console.print(f"[green]Vault initialized at {db_path}[/green]", soft_wrap=True)


@app.command()
def store(
    bucket: str = typer.Argument(..., help="Bucket name"),
    key: str = typer.Argument(..., help="Key within the bucket"),
    value: str = typer.Argument(..., help="Value to encrypt and store"),
):
    """
    Encrypt and store a value.

    Overwriting an existing key first asks for the password of the current
    value and refuses to continue if it does not decrypt.
    """
    if not bucket or not key:
        _fail("Bucket and key must not be empty.")

    with _open_storage() as storage:
        try:
            _open_vault(storage).store(bucket, key, value)
        except (VaultError, StorageError) as e:
            _fail(str(e))

    console.print(f"[green]Stored '{escape(key)}' in bucket '{escape(bucket)}'[/green]", highlight=False)


@app.command()
def get(
    bucket: str = typer.Argument(..., help="Bucket name"),
    key: str = typer.Argument(..., help="Key within the bucket"),
):
    """
    Decrypt a value and print it.
    """
    with _open_storage() as storage:
        try:
            value = _open_vault(storage).get(bucket, key)
        except (VaultError, StorageError) as e:
            _fail(str(e))

    typer.echo(value)


@app.command()
def delete(
    bucket: str = typer.Argument(..., help="Bucket name"),
    key: str = typer.Argument(..., help="Key within the bucket"),
):
    """
    Remove a value from the vault without printing it.

    The password must decrypt the value before it is removed.
    """
    with _open_storage() as storage:
        try:
            _open_vault(storage).delete(bucket, key)
        except (VaultError, StorageError) as e:
            _fail(str(e))

    console.print(f"[green]Deleted '{escape(key)}' from bucket '{escape(bucket)}'[/green]", highlight=False)


@app.command()
def buckets():
    """
    Display all created buckets.
    """
    with _open_storage() as storage:
        try:
            names = _open_vault(storage).list_buckets()
        except StorageError as e:
            _fail(str(e))

    if not names:
        console.print("[dim]No buckets yet.[/dim]")
        return

    for name in names:
        console.print(Text(name))


@app.command()
def keys(
    bucket: str = typer.Argument(..., help="Bucket name"),
):
    """
    Display the keys of a bucket and their values.

    Values the password cannot decrypt are masked.
    """
    with _open_storage() as storage:
        try:
            entries = _open_vault(storage).list_entries(bucket)
        except (VaultError, StorageError) as e:
            _fail(str(e))

    if not entries:
        console.print(Text(f"Bucket '{bucket}' has no entries."))
        return

    table = Table(title=Text(f"Bucket: {bucket}"))
    table.add_column("Key", style="cyan")
    table.add_column("Value", overflow="fold")
    table.add_column("Created")
    table.add_column("Modified")

    for entry in entries:
        table.add_row(
            Text(entry.key),
            Text(entry.value),
            _format_timestamp(entry.created_on),
            _format_timestamp(entry.modified_on),
        )

    console.print(table)


@app.command()
def reset(
    yes: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Do not ask for confirmation",
    ),
):
    """
    Drop every stored entry.
    """
    db_path = get_settings().storage.db_path
    if not db_path.exists():
        console.print(f"Nothing to reset: {db_path} does not exist", soft_wrap=True)
        return

    if not yes:
        typer.confirm(f"Permanently delete all entries in {db_path}?", abort=True)

    with SqliteStorage(db_path) as storage:
        try:
            storage.reset()
        except StorageError as e:
            _fail(str(e))

    console.print(f"[yellow]Vault at {db_path} has been reset.[/yellow]", soft_wrap=True)


@app.command()
def version():
    """Show version information."""
    console.print(f"Tresor v{__version__}")
    console.print("Store your stuff safely")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
