"""Command-line interface for the trading journal.

One-shot commands for listing, showing and editing entries, plus an
interactive editor built on the same editing session.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
