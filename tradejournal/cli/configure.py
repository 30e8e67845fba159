"""Configuration command for the journal CLI."""

import click
from rich.panel import Panel

from tradejournal.cli.common import console
from tradejournal.config import CONFIG_PATH, create_template_config


@click.command()
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing config file.",
)
def init(force: bool) -> None:
    """Create the configuration file.

    Writes a template to ~/.config/tradejournal/config.toml pointing at
    a local journal API.

    \b
    Examples:
      tradejournal init
      tradejournal init --force
    """
    if CONFIG_PATH.exists() and not force:
        console.print(Panel(
            f"[yellow]Config file already exists:[/yellow]\n{CONFIG_PATH}\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config[/bold yellow]",
            border_style="yellow",
        ))
        return

    path = create_template_config(CONFIG_PATH)
    console.print(Panel(
        f"[green]Config file created:[/green]\n{path}\n\n"
        "Set [cyan]server.api_url[/cyan] to your journal API, or\n"
        "[cyan]server.mode = \"memory\"[/cyan] for a throwaway sandbox.",
        title="[bold cyan]Config[/bold cyan]",
        border_style="cyan",
    ))
