"""Journal commands: history, calendar, soreness."""

import json
import re
from datetime import date
from typing import Annotated, Optional

import typer

from ...core.dates import is_date_key, month_key
from ...core.journal import entries_by_date
from ...io.serializers import soreness_log_entry_to_dict, workout_log_entry_to_dict
from .. import views
from ..app import DataDirOption, JsonOption, app, get_data, load_state

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


@app.command()
def history(
    data_dir: DataDirOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Limit number of sessions to show"),
    ] = None,
    date_key: Annotated[
        Optional[str],
        typer.Option("--date", help="Show the full session logged on YYYY-MM-DD"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Display logged sessions, newest first.
    """
    data = get_data(data_dir)
    state = load_state(data)
    entries = list(state.workout_log)

    if date_key is not None:
        if not is_date_key(date_key):
            views.print_error(f"Invalid date: {date_key}. Expected YYYY-MM-DD")
            raise typer.Exit(1)
        entry = entries_by_date(entries).get(date_key)
        if entry is None:
            views.print_error(f"No session logged on {date_key}")
            raise typer.Exit(1)
        if json_out:
            print(json.dumps(workout_log_entry_to_dict(entry), indent=2, ensure_ascii=False))
        else:
            views.print_session_detail(entry)
        return

    if limit is not None:
        entries = entries[:limit]

    if json_out:
        print(json.dumps([workout_log_entry_to_dict(e) for e in entries], indent=2, ensure_ascii=False))
        return

    views.print_history(entries)


@app.command()
def calendar(
    data_dir: DataDirOption = None,
    month: Annotated[
        Optional[str],
        typer.Option("--month", "-m", help="Month to show as YYYY-MM (default: current)"),
    ] = None,
) -> None:
    """
    Show a month grid with the days sessions were logged.
    """
    today = date.today()
    month = month or month_key(today)
    match = _MONTH_RE.match(month)
    if match is None or int(match.group(1)) < 1 or not 1 <= int(match.group(2)) <= 12:
        views.print_error(f"Invalid month: {month}. Expected YYYY-MM")
        raise typer.Exit(1)

    data = get_data(data_dir)
    state = load_state(data)
    year, mon = int(match.group(1)), int(match.group(2))

    try:
        grid = views.format_calendar(year, mon, list(state.workout_log), today=today)
    except OverflowError:
        # the 6-week grid spills past date.min / date.max
        views.print_error(f"Month out of range: {month}")
        raise typer.Exit(1)
    views.console.print(grid)
    logged = sum(1 for e in state.workout_log if e.date_key.startswith(month))
    views.print_info(f"{logged} session(s) logged in {month}")


@app.command()
def soreness(
    data_dir: DataDirOption = None,
    days: Annotated[
        int,
        typer.Option("--days", "-n", help="Number of logged dates to show"),
    ] = 7,
    json_out: JsonOption = False,
) -> None:
    """
    Show current soreness per movement pattern and recent reports.
    """
    data = get_data(data_dir)
    state = load_state(data)
    log = list(state.soreness_log)[: max(days, 0)]

    if json_out:
        out = {
            "soreness": dict(state.soreness),
            "sorenessLog": [soreness_log_entry_to_dict(e) for e in log],
        }
        print(json.dumps(out, indent=2))
        return

    views.console.print(views.format_soreness_table(state.soreness, log))
