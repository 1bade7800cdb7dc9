"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of sessions, plans and journals.
"""

import calendar
from datetime import date, timedelta

from rich.console import Console
from rich.table import Table

from ..core.config import (
    DEFAULT_SORENESS,
    GENERATED_KIND,
    MOVEMENT_PATTERNS,
    PATTERN_LABELS,
    SLOT_LABELS,
)
from ..core.dates import from_local_date_key, to_local_date_key
from ..core.journal import entries_by_date
from ..core.models import (
    ExerciseItem,
    SorenessLogEntry,
    SorenessMap,
    WorkoutLogEntry,
    WorkoutPlan,
)
from ..core.planner import SessionPlan

console = Console()

_MODE_LABEL = {"base": "🌱 base", "high_performance": "🔥 high performance"}
_SORENESS_STYLE = {"green": "green", "yellow": "yellow", "red": "bold red"}


def mode_label(mode: str) -> str:
    """Short display label for a mode."""
    return _MODE_LABEL.get(mode, mode)


def format_items_table(
    items: tuple[ExerciseItem, ...] | list[ExerciseItem],
    title: str,
    show_descriptions: bool = True,
    load_notes: dict[str, str] | None = None,
) -> Table:
    """
    Create a Rich table listing a session's exercise items.

    Args:
        items: Items in presentation order
        title: Table title
        show_descriptions: Include the coaching description column
        load_notes: Saved load per exercise name (adds a Load column)

    Returns:
        Rich Table object
    """
    table = Table(title=title, show_lines=show_descriptions)

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Slot", style="magenta")
    table.add_column("Exercise", style="bold")
    table.add_column("Dose", style="cyan", no_wrap=True)
    table.add_column("Equipment", style="green")
    if load_notes is not None:
        table.add_column("Load", style="yellow")
    if show_descriptions:
        table.add_column("Notes", ratio=2)

    for i, item in enumerate(items, 1):
        row = [
            str(i),
            SLOT_LABELS.get(item.slot, item.slot),
            item.name + (f" [dim]({item.hint})[/dim]" if item.hint else ""),
            item.dose,
            item.equipment or "-",
        ]
        if load_notes is not None:
            row.append(load_notes.get(item.name, ""))
        if show_descriptions:
            row.append(item.description or "")
        table.add_row(*row)

    return table


def print_session(
    session: SessionPlan,
    show_descriptions: bool = True,
    load_notes: dict[str, str] | None = None,
) -> None:
    """
    Print today's planned session: header line + item table.
    """
    plan = session.plan
    icon = f"{plan.icon} " if plan.icon else ""
    console.print()
    console.print(f"[bold cyan]{icon}{plan.name}[/bold cyan]  ·  {mode_label(session.mode)}")
    if session.forced:
        console.print(f"[dim]Day {session.day_key} was chosen manually.[/dim]")
    if session.workout.day != session.day_key:
        console.print(
            f"[yellow]Day {session.day_key} swapped for day {session.workout.day} "
            "(shoulders marked sore).[/yellow]"
        )
    console.print()
    console.print(
        format_items_table(
            session.workout.items,
            title=session.title,
            show_descriptions=show_descriptions,
            load_notes=load_notes,
        )
    )


def format_plans_table(
    plans: list[WorkoutPlan],
    active_plan_id: str,
    builtin_ids: set[str],
) -> Table:
    """
    Create a Rich table listing every plan in the catalog.

    Args:
        plans: Plans in catalog order
        active_plan_id: Currently selected plan id
        builtin_ids: Ids of shipped plans (a user plan with such an id overrides it)

    Returns:
        Rich Table object
    """
    table = Table(title="Workout Plans")

    table.add_column("", width=2)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Kind", style="magenta")
    table.add_column("Days")
    table.add_column("Source", style="dim")

    for plan in plans:
        active = "▶" if plan.id == active_plan_id else ""
        icon = f"{plan.icon} " if plan.icon else ""
        kind = "generated" if plan.kind == GENERATED_KIND else "static"
        source = "built-in" if plan.id in builtin_ids else "user"
        table.add_row(active, plan.id, icon + plan.name, kind, " ".join(plan.day_keys), source)

    return table


def format_history_table(entries: list[WorkoutLogEntry]) -> Table:
    """
    Create a Rich table displaying the session journal.

    Args:
        entries: Log entries (newest first)

    Returns:
        Rich Table object
    """
    table = Table(title="Workout History")

    table.add_column("Date", style="cyan")
    table.add_column("Plan", style="green")
    table.add_column("Day", style="magenta", justify="center")
    table.add_column("Mode")
    table.add_column("Title", style="bold")
    table.add_column("Items", justify="right")

    for entry in entries:
        table.add_row(
            entry.date_key,
            entry.plan_id,
            entry.day or "-",
            mode_label(entry.mode),
            entry.title or "-",
            str(len(entry.items)),
        )

    return table


def print_history(entries: list[WorkoutLogEntry]) -> None:
    """
    Print session history to console.

    Args:
        entries: Entries to display
    """
    if not entries:
        console.print("[yellow]No sessions recorded yet.[/yellow]")
        return

    console.print(format_history_table(entries))


def format_soreness_table(current: SorenessMap, log: list[SorenessLogEntry]) -> Table:
    """
    Create a Rich table of soreness per pattern: current value plus recent dates.

    Args:
        current: Current soreness map
        log: Recent soreness snapshots (newest first)

    Returns:
        Rich Table object
    """
    table = Table(title="Soreness")

    table.add_column("Pattern", style="bold")
    table.add_column("Now", justify="center")
    for entry in log:
        table.add_column(entry.date_key[5:], justify="center", style="dim")

    def cell(level: str) -> str:
        style = _SORENESS_STYLE.get(level, "")
        return f"[{style}]●[/{style}] {level}" if style else level

    for pattern in MOVEMENT_PATTERNS:
        row = [PATTERN_LABELS.get(pattern, pattern), cell(current.get(pattern, DEFAULT_SORENESS))]
        row.extend(cell(entry.soreness.get(pattern, DEFAULT_SORENESS)) for entry in log)
        table.add_row(*row)

    return table


def format_calendar(
    year: int,
    month: int,
    entries: list[WorkoutLogEntry],
    today: date | None = None,
) -> Table:
    """
    Create a month grid (Sun..Sat, 6 rows) marking logged sessions.

    Each cell shows the day of month and the trained day key; today is bold.

    Args:
        year: Calendar year
        month: Calendar month (1-12)
        entries: Session log (newest first; newest entry per date wins)
        today: Date to highlight (defaults to the local date)

    Returns:
        Rich Table object
    """
    today_key = to_local_date_key(today)
    by_date = entries_by_date(entries)

    start = date(year, month, 1)
    # date.weekday(): Mon=0 … Sun=6; the grid starts on Sunday
    grid_start = start - timedelta(days=(start.weekday() + 1) % 7)

    table = Table(title=f"{calendar.month_name[month]} {year}", show_lines=True)
    for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
        table.add_column(name, justify="center", width=7)

    for week in range(6):
        cells = []
        for dow in range(7):
            d = grid_start + timedelta(days=week * 7 + dow)
            key = to_local_date_key(d)
            text = str(d.day)
            entry = by_date.get(key)
            if entry is not None:
                flame = "🔥" if entry.mode == "high_performance" else ""
                text += f"\n[green]{entry.day or '✓'}{flame}[/green]"
            if d.month != month:
                text = f"[dim]{text}[/dim]"
            elif key == today_key:
                text = f"[bold reverse]{text}[/bold reverse]"
            cells.append(text)
        table.add_row(*cells)

    return table


def print_session_detail(entry: WorkoutLogEntry) -> None:
    """Print one journal entry with the exact items that were presented."""
    day = from_local_date_key(entry.date_key)
    console.print()
    console.print(
        f"[bold]{day.strftime('%A %d %B %Y')}[/bold]  ·  {entry.plan_id}  ·  {mode_label(entry.mode)}"
    )
    console.print(format_items_table(entry.items, title=entry.title or f"Day {entry.day}"))


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} [y/N]: ")
    return response.lower() in ("y", "yes")
