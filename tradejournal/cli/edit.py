"""Interactive editing session for the journal CLI.

A small command loop over one :class:`JournalSession`. Typing into a
cell only changes the local copy; ``blur`` saves it. Multi-select cells
collect toggles until ``apply`` (or ``cancel``).
"""

import shlex
from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    check_filter,
    console,
    describe_filter,
    entries_table,
    entry_panel,
    error_panel,
    filter_options,
    format_tags,
    open_session,
    run_session,
    stats_panel,
)
from tradejournal.editor import JournalSession, SelectionClosedError, is_multi_select, resolve_field
from tradejournal.options import options_for

HELP_TEXT = """\
[bold]Entries[/bold]
  list                      Show the loaded entries
  show ID                   Show every field of an entry
  new                       Create an empty entry
  delete ID                 Delete an entry
[bold]Editing[/bold]
  open ID FIELD [PHASE]     Edit a cell (PHASE: before, during, after)
  type VALUE                Change the open single-line cell locally
  blur                      Leave the cell and save it
  toggle TAG|N              Toggle a tag (or option number) in the selection
  apply                     Save the selection
  cancel                    Discard the selection
[bold]View[/bold]
  filter MONTH YEAR | all   Load a month or the whole history
  clear                     Back to the current month
  reload                    Reload the current view
  stats                     Show stats for the current view
  ok                        Dismiss the current error
  help                      Show this help
  quit                      Leave (saves an open single-line cell)"""


class EditorShell:
    """Command loop driving one session."""

    def __init__(self, session: JournalSession, currency: str):
        self.session = session
        self.currency = currency
        self.running = True
        session.errors.subscribe(self._on_error)

    def _on_error(self, message: Optional[str]) -> None:
        if message:
            console.print(error_panel(message, "Type [cyan]ok[/cyan] to dismiss."))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _print_entries(self) -> None:
        label = describe_filter(self.session.loader.filter)
        if not self.session.entries:
            console.print(f"[dim]No journal entries found ({label})[/dim]")
            return
        console.print(entries_table(
            self.session.entries, self.currency, title=f"Trading Journal ({label})"
        ))

    def _print_selection(self) -> None:
        selection = self.session.selection
        target = selection.target
        if target is None:
            return
        name = resolve_field(target.field, target.sub_field)

        table = Table(show_header=False, box=None)
        table.add_column(justify="right", style="dim")
        table.add_column()
        table.add_column()
        for index, option in enumerate(options_for(name) or (), start=1):
            mark = "[green]x[/green]" if selection.is_selected(option) else " "
            table.add_row(str(index), f"[{mark}]", option)

        console.print(Panel(
            table,
            title=f"[bold cyan]#{target.entry_id} {name}[/bold cyan]",
            subtitle=f"selected: {format_tags(selection.pending)}",
            border_style="cyan",
        ))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def _blur_active(self) -> None:
        active = self.session.editing.active
        if active is None:
            return
        if is_multi_select(resolve_field(active.field, active.sub_field)):
            return
        entry = await self.session.blur(active)
        if entry is not None:
            console.print(f"[green]Saved #{entry.id} {active.field}[/green]")

    async def do_open(self, args: list[str]) -> None:
        if len(args) not in (2, 3):
            raise click.UsageError("open ID FIELD [PHASE]")
        entry_id, field = args[0], args[1]
        phase = args[2] if len(args) == 3 else None

        name = resolve_field(field, phase)
        if self.session.store.get(entry_id) is None:
            console.print(f"[yellow]Entry #{entry_id} is not loaded[/yellow]")
            return

        # Clicking another cell leaves the current one
        await self._blur_active()
        self.session.open(entry_id, field, phase)
        if is_multi_select(name):
            self._print_selection()
        else:
            current = self.session.display(entry_id, field, phase)
            if current is None or current == "":
                current = "-"
            console.print(f"[dim]Editing #{entry_id} {name} (now: {current})[/dim]")

    async def do_type(self, args: list[str]) -> None:
        active = self.session.editing.active
        if active is None or is_multi_select(resolve_field(active.field, active.sub_field)):
            console.print("[yellow]Open a single-line cell first[/yellow]")
            return
        entry = self.session.update(" ".join(args))
        if entry is not None:
            value = self.session.display(active.entry_id, active.field, active.sub_field)
            console.print(f"[dim]{active.field} = {value!r} (not saved)[/dim]")

    async def do_blur(self, args: list[str]) -> None:
        if self.session.editing.active is None:
            console.print("[yellow]Nothing is being edited[/yellow]")
            return
        await self._blur_active()

    async def do_toggle(self, args: list[str]) -> None:
        target = self.session.selection.target
        if target is None:
            raise SelectionClosedError("No multi-select editor is open")
        options = options_for(resolve_field(target.field, target.sub_field)) or ()
        for arg in args:
            if arg.isdigit() and 1 <= int(arg) <= len(options):
                arg = options[int(arg) - 1]
            self.session.toggle(arg)
        self._print_selection()

    async def do_apply(self, args: list[str]) -> None:
        entry = await self.session.apply_selection()
        if entry is not None:
            console.print(f"[green]Saved #{entry.id}[/green]")

    async def do_cancel(self, args: list[str]) -> None:
        self.session.cancel_selection()
        console.print("[dim]Selection discarded[/dim]")

    async def do_list(self, args: list[str]) -> None:
        self._print_entries()

    async def do_show(self, args: list[str]) -> None:
        if len(args) != 1:
            raise click.UsageError("show ID")
        entry = self.session.store.get(args[0])
        if entry is None:
            entry = await self.session.load_entry(args[0])
        if entry is not None:
            console.print(entry_panel(entry, self.currency))

    async def do_new(self, args: list[str]) -> None:
        entry = await self.session.create()
        if entry is not None:
            console.print(f"[green]Created entry #{entry.id}[/green]")

    async def do_delete(self, args: list[str]) -> None:
        if len(args) != 1:
            raise click.UsageError("delete ID")
        if await self.session.delete(args[0]):
            console.print(f"[green]Deleted entry #{args[0]}[/green]")

    async def do_filter(self, args: list[str]) -> None:
        await self._blur_active()
        if args == ["all"]:
            ok = await self.session.apply_filter(show_all=True)
        elif len(args) == 2 and all(a.isdigit() for a in args):
            ok = await self.session.apply_filter(int(args[0]), int(args[1]))
        else:
            raise click.UsageError("filter MONTH YEAR | all")
        if ok:
            self._print_entries()

    async def do_clear(self, args: list[str]) -> None:
        await self._blur_active()
        if await self.session.clear_filter():
            self._print_entries()

    async def do_reload(self, args: list[str]) -> None:
        await self._blur_active()
        if await self.session.reload():
            self._print_entries()

    async def do_stats(self, args: list[str]) -> None:
        loader = self.session.loader
        if loader.stats is None:
            console.print("[dim]No stats loaded[/dim]")
            return
        console.print(stats_panel(loader.stats, loader.filter, self.currency))

    async def do_ok(self, args: list[str]) -> None:
        self.session.clear_error()

    async def do_help(self, args: list[str]) -> None:
        console.print(Panel(HELP_TEXT, title="[bold cyan]Commands[/bold cyan]", border_style="cyan"))

    async def do_quit(self, args: list[str]) -> None:
        await self._blur_active()
        self.running = False

    do_exit = do_quit

    async def execute(self, line: str) -> None:
        """Run one command line."""
        try:
            words = shlex.split(line)
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")
            return
        if not words:
            return

        handler = getattr(self, f"do_{words[0].lower()}", None)
        if handler is None:
            console.print(f"[yellow]Unknown command '{words[0]}', type help[/yellow]")
            return

        try:
            await handler(words[1:])
        except click.UsageError as e:
            console.print(f"[yellow]Usage: {e.message}[/yellow]")
        except (ValueError, SelectionClosedError) as e:
            console.print(f"[yellow]{e}[/yellow]")

    async def run(self, month: Optional[int], year: Optional[int], show_all: bool) -> None:
        await self.session.apply_filter(month, year, show_all)
        self._print_entries()
        console.print("[dim]Type help for commands.[/dim]")

        while self.running:
            try:
                line = click.prompt("journal", prompt_suffix="> ", default="", show_default=False)
            except (EOFError, click.Abort):
                await self.do_quit([])
                break
            await self.execute(line)


@click.command()
@filter_options
def edit(month: Optional[int], year: Optional[int], show_all: bool) -> None:
    """Edit the journal interactively.

    Loads the current month (or the given one) and opens a command
    prompt. Type help inside the editor for the commands.

    \b
    Examples:
      tradejournal edit
      tradejournal edit --month 3 --year 2024
    """
    check_filter(month, year, show_all)
    session, currency = open_session()
    shell = EditorShell(session, currency)

    async def action(s: JournalSession) -> None:
        await shell.run(month, year, show_all)

    run_session(session, action)
