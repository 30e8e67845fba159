"""Statistics commands for the journal CLI."""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import (
    check_filter,
    console,
    fail,
    fail_from_session,
    filter_options,
    format_pnl,
    open_session,
    run_session,
    stats_panel,
    summary_table,
)
from tradejournal.editor import JournalSession
from tradejournal.models import TradingSummary


@click.command()
@filter_options
def stats(month: Optional[int], year: Optional[int], show_all: bool) -> None:
    """Display trading stats for a month.

    Shows total P&L, win rate and the number of winning and losing
    trades. Without options the current month is used.

    \b
    Examples:
      tradejournal stats
      tradejournal stats --month 3 --year 2024
      tradejournal stats --all
    """
    check_filter(month, year, show_all)
    session, currency = open_session()

    async def action(s: JournalSession) -> bool:
        return await s.apply_filter(month, year, show_all)

    if not run_session(session, action):
        fail_from_session(session, "Failed to load journal data")

    if session.loader.stats is None:
        fail("The server returned no stats.")

    console.print(stats_panel(session.loader.stats, session.loader.filter, currency))


@click.command()
def summary() -> None:
    """Display the all-time summary with a monthly breakdown.

    \b
    Examples:
      tradejournal summary
    """
    session, currency = open_session()

    async def action(s: JournalSession) -> Optional[TradingSummary]:
        return await s.summary()

    result = run_session(session, action)
    if result is None:
        fail_from_session(session, "Failed to load trading summary")

    console.print(Panel(
        f"[bold]All Time[/bold]\n\n"
        f"Total P&L:  {format_pnl(result.total_pnl_value, currency)}\n"
        f"Win Rate:   {result.win_rate_value:.1f}%\n"
        f"{'─' * 30}\n"
        f"[dim]Entries: {result.total_entries}[/dim]",
        title="[bold cyan]Summary[/bold cyan]",
        border_style="cyan",
    ))

    if result.monthly_breakdown:
        console.print(summary_table(result, currency))
