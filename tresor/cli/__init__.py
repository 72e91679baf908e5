"""Command-line interface for Tresor."""
