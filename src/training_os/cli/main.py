"""
CLI entry point using Typer.

Provides commands for daily training:
- today: Show the next session of the active plan
- log-session: Mark it done and report soreness
- plans / use-plan / upload-plan / export-plan / remove-plan: Plan library
- set-day / clear-day: Pick the next day manually
- history / calendar / soreness: Journals
- load-note / reset: Housekeeping
"""

from pathlib import Path
from typing import Optional

import typer

from . import views
from .app import DataDirOption, app, get_catalog, get_data, load_state

# Command modules register themselves on `app` when imported
from .commands import history, plans, settings, workout  # noqa: F401
from .commands.history import calendar, soreness
from .commands.history import history as show_history
from .commands.plans import plans as list_plans
from .commands.workout import log_session, today


def _menu_use_plan(ctx: typer.Context, data_dir: Optional[Path] = None) -> None:
    """Interactive plan picker called from the main menu."""
    data = get_data(data_dir)
    catalog = get_catalog(data)
    all_plans = catalog.list_all()
    active = catalog.find(load_state(data).active_plan_id)

    for i, plan in enumerate(all_plans, 1):
        marker = "▶" if plan.id == active.id else " "
        icon = f"{plan.icon} " if plan.icon else ""
        views.console.print(f"  {marker} \\[{i}] {icon}{plan.name} [dim]({plan.id})[/dim]")

    while True:
        raw = views.console.input("Plan # (Enter to cancel): ").strip()
        if not raw:
            views.print_info("Cancelled.")
            return
        try:
            idx = int(raw)
        except ValueError:
            views.print_error("Enter a number")
            continue
        if idx < 1 or idx > len(all_plans):
            views.print_error(f"Enter a number between 1 and {len(all_plans)}")
            continue
        ctx.invoke(plans.use_plan, plan_id=all_plans[idx - 1].id, data_dir=data_dir)
        return


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context, data_dir: DataDirOption = None) -> None:
    """
    Daily workout planner. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return  # sub-command handles it

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]training-os[/bold cyan] — daily workout planner")
    views.console.print()

    menu = {
        "1": ("today",       "Show today's session"),
        "2": ("log-session", "Mark session done"),
        "3": ("history",     "Show history"),
        "4": ("calendar",    "Calendar"),
        "5": ("soreness",    "Soreness"),
        "p": ("plans",       "List plans"),
        "u": ("use-plan",    "Switch plan"),
        "0": ("quit",        "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    cmd_map = {k: v[0] for k, v in menu.items()}
    chosen = cmd_map.get(choice)

    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "today":
        ctx.invoke(today, data_dir=data_dir)
    elif chosen == "log-session":
        ctx.invoke(log_session, data_dir=data_dir)
    elif chosen == "history":
        ctx.invoke(show_history, data_dir=data_dir, limit=10)
    elif chosen == "calendar":
        ctx.invoke(calendar, data_dir=data_dir)
    elif chosen == "soreness":
        ctx.invoke(soreness, data_dir=data_dir)
    elif chosen == "plans":
        ctx.invoke(list_plans, data_dir=data_dir)
    elif chosen == "use-plan":
        _menu_use_plan(ctx, data_dir)


if __name__ == "__main__":
    app()
