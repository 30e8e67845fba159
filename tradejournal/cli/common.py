"""Shared helpers for the journal CLI commands.

Builds sessions from the config file, runs them on an event loop and
renders entries and stats with rich.
"""

import asyncio
from typing import Any, Awaitable, Callable, Iterable, NoReturn, Optional, TypeVar

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.config import build_remote, currency_symbol, load_config
from tradejournal.editor import JournalSession, display_value
from tradejournal.models import FilterState, JournalEntry, TradingStats, TradingSummary

console = Console()

T = TypeVar("T")

PHASES = ("before", "during", "after")


def error_panel(message: str, hint: Optional[str] = None) -> Panel:
    """Red error panel in the style used by every command."""
    text = f"[red]{message}[/red]"
    if hint:
        text += f"\n\n{hint}"
    return Panel(
        text,
        title="[bold red]Error[/bold red]",
        border_style="red",
    )


def fail(message: str, hint: Optional[str] = None) -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(error_panel(message, hint))
    raise SystemExit(1)


def open_session() -> tuple[JournalSession, str]:
    """Create a session for the configured server.

    Returns:
        Session and the currency symbol used for P&L.
    """
    config = load_config()
    try:
        remote = build_remote(config)
    except ValueError as e:
        fail(
            f"Invalid configuration: {e}",
            "Run [cyan]tradejournal init --force[/cyan] to recreate the config file.",
        )
    return JournalSession(remote), currency_symbol(config)


def run_session(session: JournalSession, action: Callable[[JournalSession], Awaitable[T]]) -> T:
    """Run one async action against a session and close its remote.

    Args:
        session: Session to drive.
        action: Coroutine function receiving the session.

    Returns:
        Whatever the action returns.
    """
    async def runner() -> T:
        try:
            return await action(session)
        finally:
            await session.aclose()

    return asyncio.run(runner())


def fail_from_session(session: JournalSession, fallback: str) -> NoReturn:
    """Exit with the message currently held by the session's error slot."""
    fail(session.errors.message or fallback)


def filter_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared --month/--year/--all options."""
    command = click.option(
        "--all",
        "show_all",
        is_flag=True,
        default=False,
        help="Show the whole history.",
    )(command)
    command = click.option(
        "--year",
        type=click.IntRange(min=1),
        default=None,
        help="Year of the month to show.",
    )(command)
    command = click.option(
        "--month",
        type=click.IntRange(1, 12),
        default=None,
        help="Month to show (1-12, needs --year).",
    )(command)
    return command


def check_filter(month: Optional[int], year: Optional[int], show_all: bool) -> None:
    """Reject a month without a year (or the other way round)."""
    if not show_all and (month is None) != (year is None):
        fail("--month and --year must be given together.")


def describe_filter(filter_state: FilterState) -> str:
    """Human readable label for a filter."""
    if filter_state.show_all:
        return "All time"
    if filter_state.month is not None and filter_state.year is not None:
        return f"{filter_state.year}-{filter_state.month:02d}"
    return "Current month"


def format_pnl(value: float, currency: str = "$") -> str:
    """Colour a P&L amount green/red with an explicit sign."""
    color = "green" if value >= 0 else "red"
    sign = "+" if value >= 0 else "-"
    return f"[{color}]{sign}{currency}{abs(value):,.2f}[/{color}]"


def format_tags(tags: Iterable[str]) -> str:
    text = ", ".join(tags)
    return text or "[dim]-[/dim]"


def format_text(value: Optional[str], width: int = 30) -> str:
    if not value:
        return "[dim]-[/dim]"
    if len(value) > width:
        return value[: width - 3] + "..."
    return value


def entries_table(
    entries: Iterable[JournalEntry],
    currency: str = "$",
    title: str = "Trading Journal",
    numbered: bool = False,
) -> Table:
    """Table with one row per entry."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
    )

    if numbered:
        table.add_column("#", justify="right", style="dim")
    table.add_column("ID", style="bold")
    table.add_column("Date")
    table.add_column("Bias")
    table.add_column("Kill Zone")
    table.add_column("Array")
    table.add_column("Results")
    table.add_column("P&L", justify="right")
    table.add_column("Emotions", max_width=24)
    table.add_column("Mistake", max_width=30)

    for index, entry in enumerate(entries, start=1):
        row = [
            entry.id,
            entry.date.isoformat() if entry.date else "[dim]-[/dim]",
            format_tags(entry.bias),
            format_text(entry.kill_zone, 16),
            format_tags(entry.array),
            format_tags(entry.results),
            format_pnl(entry.pnl, currency),
            format_tags(entry.emotions),
            format_text(entry.mistake),
        ]
        if numbered:
            row.insert(0, str(index))
        table.add_row(*row)

    return table


def entry_panel(entry: JournalEntry, currency: str = "$") -> Panel:
    """Detail panel for a single entry."""
    date_text = entry.date.isoformat() if entry.date else "[dim]-[/dim]"

    phases = "\n".join(
        f"  {phase.capitalize():<7} {format_tags(display_value(entry, 'emotions', phase))}"
        for phase in PHASES
    )

    text = (
        f"[bold]Date:[/bold]       {date_text}\n"
        f"[bold]Bias:[/bold]       {format_tags(entry.bias)}\n"
        f"[bold]Kill Zone:[/bold]  {entry.kill_zone or '[dim]-[/dim]'}\n"
        f"[bold]Array:[/bold]      {format_tags(entry.array)}\n"
        f"[bold]Results:[/bold]    {format_tags(entry.results)}\n"
        f"[bold]P&L:[/bold]        {format_pnl(entry.pnl, currency)}\n"
        f"{'─' * 30}\n"
        f"[bold]Emotions:[/bold]   {format_tags(entry.emotions)}\n"
        f"{phases}\n"
        f"{'─' * 30}\n"
        f"[bold]LTF:[/bold]        {entry.ltf or '[dim]-[/dim]'}\n"
        f"[bold]HTF:[/bold]        {entry.htf or '[dim]-[/dim]'}\n"
        f"[bold]Mistake:[/bold]    {entry.mistake or '[dim]-[/dim]'}\n"
        f"[bold]Reason:[/bold]     {entry.reason or '[dim]-[/dim]'}"
    )

    if entry.updated_at:
        text += f"\n\n[dim]Updated {entry.updated_at}[/dim]"

    return Panel(
        text,
        title=f"[bold cyan]Entry #{entry.id}[/bold cyan]",
        border_style="cyan",
    )


def stats_panel(stats: TradingStats, filter_state: FilterState, currency: str = "$") -> Panel:
    """Stats panel for the applied filter."""
    if stats.period is not None and not filter_state.show_all:
        label = f"{stats.period.month_name} {stats.period.year}".strip()
    else:
        label = describe_filter(filter_state)

    text = (
        f"[bold]Trading Stats[/bold] ({label})\n\n"
        f"Total P&L:  {format_pnl(stats.total_pnl_value, currency)}\n"
        f"Win Rate:   {stats.win_rate_value:.1f}%\n"
        f"{'─' * 30}\n"
        f"[dim]Trades: {stats.total_trades} | "
        f"Wins: {stats.winning_trades} | "
        f"Losses: {stats.losing_trades}[/dim]"
    )

    return Panel(
        text,
        title="[bold cyan]Stats[/bold cyan]",
        border_style="cyan",
    )


def summary_table(summary: TradingSummary, currency: str = "$") -> Table:
    """Monthly breakdown table for the trading summary."""
    table = Table(
        title="Monthly Breakdown",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Month", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("P&L", justify="right")
    table.add_column("Win Rate", justify="right")

    for month in summary.monthly_breakdown:
        table.add_row(
            month.month,
            str(month.entries),
            format_pnl(month.pnl_value, currency),
            f"{month.win_rate_value:.1f}%",
        )

    return table
