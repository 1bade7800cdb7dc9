"""Housekeeping commands: load-note, reset."""

import json
from typing import Annotated, Optional

import typer

from .. import views
from ..app import DataDirOption, JsonOption, app, get_data


@app.command("load-note")
def load_note(
    name: Annotated[
        Optional[str],
        typer.Argument(help="Exercise name exactly as shown by `today`"),
    ] = None,
    load: Annotated[
        Optional[str],
        typer.Argument(help="Free-text load, e.g. 24kg or 135x5"),
    ] = None,
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show or set the load you use for an exercise.

    Without arguments lists every note; with NAME shows one; with NAME and
    LOAD saves it.  Notes follow the exercise name across plans.
    """
    store = get_data(data_dir).load_notes

    if name is None:
        notes = store.load_all()
        if json_out:
            print(json.dumps(notes, indent=2, ensure_ascii=False))
            return
        if not notes:
            views.print_info("No load notes saved.")
            return
        for exercise, value in sorted(notes.items()):
            views.console.print(f"  [bold]{exercise}[/bold]: [yellow]{value}[/yellow]")
        return

    if load is None:
        value = store.get(name)
        if json_out:
            print(json.dumps({name: value}, ensure_ascii=False))
        elif value:
            views.console.print(f"[bold]{name}[/bold]: [yellow]{value}[/yellow]")
        else:
            views.print_info(f"No load note for {name}.")
        return

    if not store.set(name, load.strip()):
        views.print_error("Could not save the load note")
        raise typer.Exit(1)
    views.print_success(f"{name}: {load.strip()}")


@app.command()
def reset(
    data_dir: DataDirOption = None,
    plans: Annotated[
        bool,
        typer.Option("--plans", help="Also delete uploaded plans"),
    ] = False,
    everything: Annotated[
        bool,
        typer.Option("--all", help="Delete workout data, uploaded plans and load notes"),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Reset without prompting"),
    ] = False,
) -> None:
    """
    Clear workout data (rotation, soreness, history, active plan).

    Uploaded plans and load notes are kept unless --plans or --all is given.
    """
    data = get_data(data_dir)

    if everything:
        what = "ALL data (workouts, uploaded plans, load notes)"
    elif plans:
        what = "workout data and uploaded plans"
    else:
        what = "workout data"

    if not force and not views.confirm_action(f"Delete {what} in {data.root}?"):
        views.print_info("Cancelled.")
        return

    if everything:
        data.reset_all()
    else:
        data.state.reset()
        if plans:
            data.plans.clear()
    views.print_success(f"Deleted {what}.")
