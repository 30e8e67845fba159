"""Main CLI entry point for the trading journal.

Provides the click group with lazily loaded subcommands so that
``tradejournal --help`` does not import httpx or the editor engine.
"""

import logging

import click
from rich.console import Console


class LazyGroup(click.Group):
    """A click Group that imports command modules on first use.

    Subcommands are given as ``"package.module:attribute"`` specs.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to import specs.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing it if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        import importlib

        module_path, _, attr_name = self._lazy_subcommands[cmd_name].partition(":")
        module = importlib.import_module(module_path)

        cmd = getattr(module, attr_name or cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"'{cmd_name}' in {module_path} is not a click command")

        self.add_command(cmd, cmd_name)
        return cmd


# Command name -> "module:attribute" defining it
LAZY_SUBCOMMANDS = {
    "init": "tradejournal.cli.configure:init",
    "list": "tradejournal.cli.entries:list_entries",
    "show": "tradejournal.cli.entries:show",
    "new": "tradejournal.cli.entries:new",
    "set": "tradejournal.cli.entries:set_field",
    "tag": "tradejournal.cli.entries:tag",
    "delete": "tradejournal.cli.entries:delete",
    "stats": "tradejournal.cli.stats:stats",
    "summary": "tradejournal.cli.stats:summary",
    "edit": "tradejournal.cli.edit:edit",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _setup_logging(verbose: bool) -> None:
    """Send debug logs to the console, or silence them."""
    if not verbose:
        logging.getLogger("tradejournal").addHandler(logging.NullHandler())
        return

    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # Request lines are already logged by the remote
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log requests and failures.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeJournal - keep a trading journal from the terminal.

    Edits are applied locally at once and saved to the journal API.

    \b
    Quick Start:
      tradejournal init        # Create the config file
      tradejournal list        # This month's entries
      tradejournal edit        # Interactive editor
    """
    ctx.ensure_object(dict)
    _setup_logging(verbose)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
