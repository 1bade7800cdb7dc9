"""Workout commands: today, set-day, clear-day, log-session."""

import json
from typing import Annotated, Optional

import typer

from ...core.config import MOVEMENT_PATTERNS, PATTERN_LABELS
from ...core.dates import is_date_key, to_local_date_key
from ...core.journal import complete_session
from ...core.models import SorenessMap
from ...core.planner import SessionPlan, plan_session
from ...io.serializers import (
    ValidationError,
    exercise_item_to_dict,
    parse_soreness_pairs,
    validate_soreness_level,
)
from .. import views
from ..app import (
    DataDirOption,
    JsonOption,
    app,
    get_catalog,
    get_data,
    get_settings,
    load_state,
    resolve_mode,
)

ModeOption = Annotated[
    Optional[str],
    typer.Option("--mode", "-m", help="base or high_performance (aliases: standard, hp)"),
]


def _session_to_dict(session: SessionPlan) -> dict:
    return {
        "planId": session.plan.id,
        "planName": session.plan.name,
        "plannedDay": session.day_key,
        "day": session.workout.day,
        "mode": session.mode,
        "title": session.title,
        "forced": session.forced,
        "items": [exercise_item_to_dict(item) for item in session.workout.items],
    }


def _prompt_soreness(current: SorenessMap) -> SorenessMap:
    """
    Ask for post-session soreness pattern by pattern.

    Enter keeps the current value (green if never set).
    """
    views.console.print()
    views.console.print("[bold]How does each movement pattern feel?[/bold]")
    views.console.print("  [green]g[/green]reen / [yellow]y[/yellow]ellow / [red]r[/red]ed, Enter keeps the current value\n")

    shorthand = {"g": "green", "y": "yellow", "r": "red"}
    result: SorenessMap = {}
    for pattern in MOVEMENT_PATTERNS:
        default = current.get(pattern, "green")
        while True:
            raw = views.console.input(f"  {PATTERN_LABELS[pattern]} \\[{default}]: ").strip().lower()
            if not raw:
                result[pattern] = default
                break
            try:
                result[pattern] = validate_soreness_level(shorthand.get(raw, raw))  # type: ignore
                break
            except ValidationError as e:
                views.print_error(str(e))
    return result


@app.command()
def today(
    data_dir: DataDirOption = None,
    mode: ModeOption = None,
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Preview a specific day key instead of the planned one"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show the next session of the active plan.

    The day is the user override if one is set, otherwise the one after the
    last trained day; a red shoulder_stability swaps day C for day D.
    """
    data = get_data(data_dir)
    mode = resolve_mode(mode, data)
    state = load_state(data)
    catalog = get_catalog(data)

    if day is not None:
        plan = catalog.find(state.active_plan_id)
        if day not in plan.day_keys:
            views.print_error(f"Plan '{plan.id}' has no day '{day}'. Days: {', '.join(plan.day_keys)}")
            raise typer.Exit(1)

    session = plan_session(state, catalog, mode, day_key=day)  # type: ignore

    if json_out:
        print(json.dumps(_session_to_dict(session), indent=2, ensure_ascii=False))
        return

    settings = get_settings(data)
    views.print_session(
        session,
        show_descriptions=settings["show_descriptions"],
        load_notes=data.load_notes.load_all(),
    )


@app.command("set-day")
def set_day(
    day_key: Annotated[str, typer.Argument(help="Day key to train next, e.g. C")],
    data_dir: DataDirOption = None,
) -> None:
    """
    Choose the next session's day manually.

    The choice holds until a session is logged or clear-day is run.
    """
    data = get_data(data_dir)
    state = load_state(data)
    plan = get_catalog(data).find(state.active_plan_id)

    if day_key not in plan.day_keys:
        views.print_error(
            f"Plan '{plan.id}' has no day '{day_key}'. Days: {', '.join(plan.day_keys)}"
        )
        raise typer.Exit(1)

    data.state.save(state.with_changes(day_override=day_key))
    views.print_success(f"Next session set to day {day_key} ({plan.name}).")


@app.command("clear-day")
def clear_day(data_dir: DataDirOption = None) -> None:
    """Drop a manual day choice and go back to the rotation."""
    data = get_data(data_dir)
    state = load_state(data)
    if state.day_override is None:
        views.print_info("No day override set.")
        return
    data.state.save(state.with_changes(day_override=None))
    views.print_success("Day override cleared.")


@app.command("log-session")
def log_session(
    data_dir: DataDirOption = None,
    mode: ModeOption = None,
    date: Annotated[
        Optional[str],
        typer.Option("--date", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    soreness: Annotated[
        Optional[list[str]],
        typer.Option(
            "--soreness",
            "-s",
            help="Post-session soreness as pattern=level; repeatable or comma-separated",
        ),
    ] = None,
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Log this day key instead of the planned one"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Mark the next session as done.

    Records exactly what `today` shows (with the same options), saves the
    soreness report, advances the rotation and clears any day override.
    Logging twice on the same date replaces that date's entry.
    """
    data = get_data(data_dir)
    mode = resolve_mode(mode, data)

    date_key = date or to_local_date_key()
    if not is_date_key(date_key):
        views.print_error(f"Invalid date: {date_key}. Expected YYYY-MM-DD")
        raise typer.Exit(1)

    state = load_state(data)
    catalog = get_catalog(data)

    if day is not None:
        plan = catalog.find(state.active_plan_id)
        if day not in plan.day_keys:
            views.print_error(f"Plan '{plan.id}' has no day '{day}'. Days: {', '.join(plan.day_keys)}")
            raise typer.Exit(1)

    session = plan_session(state, catalog, mode, day_key=day)  # type: ignore

    if not soreness:
        if json_out:
            reported: SorenessMap = dict(state.soreness)
        else:
            reported = _prompt_soreness(state.soreness)
    else:
        try:
            reported = {**state.soreness, **parse_soreness_pairs(soreness)}
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    new_state = complete_session(
        state,
        plan=session.plan,
        workout=session.workout,
        mode=session.mode,
        soreness=reported,
        date_key=date_key,
        title=session.title,
    )
    data.state.save(new_state)

    if json_out:
        print(json.dumps({"dateISO": date_key, **_session_to_dict(session)}, indent=2, ensure_ascii=False))
        return

    views.print_success(f"Logged {date_key}: {session.title} ({views.mode_label(session.mode)})")
    sore = [p for p, level in reported.items() if level != "green"]
    if sore:
        views.print_info("Sore: " + ", ".join(f"{p}={reported[p]}" for p in sore))
