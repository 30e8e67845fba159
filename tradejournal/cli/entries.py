"""Entry commands for the journal CLI.

List, show, create, edit and delete journal entries. Edits go through
the same session pipeline as the interactive editor: open the cell,
change it, then blur (single-line fields) or apply (multi-select).
"""

from typing import Optional

import click
from rich.panel import Panel

from tradejournal.cli.common import (
    PHASES,
    check_filter,
    console,
    describe_filter,
    entries_table,
    entry_panel,
    fail,
    fail_from_session,
    filter_options,
    open_session,
    run_session,
)
from tradejournal.codec import split_tags
from tradejournal.editor import JournalSession, is_multi_select, resolve_field
from tradejournal.editor.errors import SAVE_FAILED
from tradejournal.models import JournalEntry
from tradejournal.options import options_for


def _resolve(field: str, phase: Optional[str]) -> str:
    """Resolve FIELD/--phase, exiting on unknown names."""
    try:
        return resolve_field(field, phase)
    except ValueError as e:
        fail(str(e), "Editable fields: date, ltf, htf, bias, kill_zone, array, results, "
                     "pnl, emotions, mistake, reason.")


@click.command(name="list")
@filter_options
def list_entries(month: Optional[int], year: Optional[int], show_all: bool) -> None:
    """List journal entries for a month.

    Without options the current month is shown.

    \b
    Examples:
      tradejournal list                      # Current month
      tradejournal list --month 3 --year 2024
      tradejournal list --all                # Whole history
    """
    check_filter(month, year, show_all)
    session, currency = open_session()

    async def action(s: JournalSession) -> bool:
        return await s.apply_filter(month, year, show_all)

    if not run_session(session, action):
        fail_from_session(session, "Failed to load journal data")

    label = describe_filter(session.loader.filter)
    if not session.entries:
        console.print(Panel(
            "[dim]No journal entries found[/dim]",
            title=f"[bold]Trading Journal ({label})[/bold]",
            border_style="dim",
        ))
        return

    console.print(entries_table(session.entries, currency, title=f"Trading Journal ({label})"))
    console.print(f"\n[dim]{len(session.entries)} entries[/dim]")


@click.command()
@click.argument("entry_id")
def show(entry_id: str) -> None:
    """Show every field of one entry.

    \b
    Examples:
      tradejournal show 12
    """
    session, currency = open_session()

    async def action(s: JournalSession) -> Optional[JournalEntry]:
        return await s.load_detail(entry_id)

    entry = run_session(session, action)
    if entry is None:
        fail_from_session(session, "Failed to load journal entry")

    console.print(entry_panel(entry, currency))


@click.command()
def new() -> None:
    """Create an empty entry.

    \b
    Examples:
      tradejournal new
    """
    session, currency = open_session()

    async def action(s: JournalSession) -> Optional[JournalEntry]:
        return await s.create()

    entry = run_session(session, action)
    if entry is None:
        fail_from_session(session, "Failed to create new entry")

    console.print(f"[green]Created entry #{entry.id}[/green]")
    console.print(entry_panel(entry, currency))


@click.command(name="set")
@click.argument("entry_id")
@click.argument("field")
@click.argument("value")
@click.option(
    "--phase",
    type=click.Choice(PHASES),
    default=None,
    help="Emotion phase to edit (emotions only).",
)
def set_field(entry_id: str, field: str, value: str, phase: Optional[str]) -> None:
    """Set one field of an entry.

    Multi-select fields take a comma-separated list that replaces the
    current selection. An empty VALUE clears the field.

    \b
    Examples:
      tradejournal set 12 pnl 250.5
      tradejournal set 12 date 2024-03-15
      tradejournal set 12 results "Win, News"
      tradejournal set 12 emotions Calm --phase before
    """
    name = _resolve(field, phase)
    session, currency = open_session()

    async def action(s: JournalSession) -> Optional[JournalEntry]:
        if await s.load_detail(entry_id) is None:
            return None
        s.open(entry_id, field, phase)

        if not is_multi_select(name):
            s.update(value)
            return await s.blur()

        for tag in s.selection.pending:
            s.toggle(tag)
        for tag in split_tags(value):
            s.toggle(tag)
        return await s.apply_selection()

    entry = run_session(session, action)
    if entry is None:
        fail_from_session(session, SAVE_FAILED)

    console.print(entry_panel(entry, currency))


@click.command()
@click.argument("entry_id")
@click.argument("field")
@click.argument("tags", nargs=-1, required=True)
@click.option(
    "--phase",
    type=click.Choice(PHASES),
    default=None,
    help="Emotion phase to edit (emotions only).",
)
def tag(entry_id: str, field: str, tags: tuple[str, ...], phase: Optional[str]) -> None:
    """Toggle tags on a multi-select field.

    Each TAG is added if missing and removed if present.

    \b
    Examples:
      tradejournal tag 12 array FVG OB
      tradejournal tag 12 emotions FOMO --phase during
    """
    name = _resolve(field, phase)
    if not is_multi_select(name):
        fail(
            f"'{field}' is not a multi-select field.",
            f"Use [cyan]tradejournal set {entry_id} {field} VALUE[/cyan] instead.",
        )

    options = options_for(name) or ()
    unknown = [t for t in tags if t not in options]
    if unknown:
        console.print(f"[yellow]Not in the {field} options: {', '.join(unknown)}[/yellow]")

    session, currency = open_session()

    async def action(s: JournalSession) -> Optional[JournalEntry]:
        if await s.load_detail(entry_id) is None:
            return None
        s.open(entry_id, field, phase)
        for t in tags:
            s.toggle(t)
        return await s.apply_selection()

    entry = run_session(session, action)
    if entry is None:
        fail_from_session(session, SAVE_FAILED)

    console.print(entry_panel(entry, currency))


@click.command()
@click.argument("entry_id")
@click.option(
    "--confirm",
    is_flag=True,
    default=False,
    help="Delete without asking.",
)
def delete(entry_id: str, confirm: bool) -> None:
    """Delete an entry.

    \b
    Examples:
      tradejournal delete 12
      tradejournal delete 12 --confirm
    """
    if not confirm:
        click.confirm(f"Delete entry #{entry_id}?", abort=True)

    session, _ = open_session()

    async def action(s: JournalSession) -> bool:
        return await s.delete(entry_id)

    if not run_session(session, action):
        fail_from_session(session, "Failed to delete entry")

    console.print(f"[green]Deleted entry #{entry_id}[/green]")
