"""
Session and soreness journals.

Both logs hold at most one entry per local calendar date and are kept
newest-first.  Functions here return new values; persistence is the caller's
job (see io/state_store.py).
"""

from collections.abc import Iterable, Mapping

from .models import (
    AppState,
    Mode,
    SorenessLogEntry,
    SorenessMap,
    Workout,
    WorkoutLogEntry,
    WorkoutPlan,
)


def record_session(
    log: Iterable[WorkoutLogEntry], entry: WorkoutLogEntry
) -> tuple[WorkoutLogEntry, ...]:
    """
    Add ``entry`` to the session log, replacing any entry for the same date.

    Args:
        log: Existing entries (any order)
        entry: Entry to record

    Returns:
        New log sorted newest date first
    """
    kept = [e for e in log if e.date_key != entry.date_key]
    kept.append(entry)
    kept.sort(key=lambda e: e.date_key, reverse=True)
    return tuple(kept)


def record_soreness(
    log: Iterable[SorenessLogEntry], date_key: str, soreness: Mapping[str, str]
) -> tuple[SorenessLogEntry, ...]:
    """
    Add a soreness snapshot for ``date_key``, replacing an existing one.

    Returns:
        New log sorted newest date first
    """
    kept = [e for e in log if e.date_key != date_key]
    kept.append(SorenessLogEntry(date_key=date_key, soreness=dict(soreness)))  # type: ignore
    kept.sort(key=lambda e: e.date_key, reverse=True)
    return tuple(kept)


def complete_session(
    state: AppState,
    plan: WorkoutPlan,
    workout: Workout,
    mode: Mode,
    soreness: SorenessMap,
    date_key: str,
    title: str,
) -> AppState:
    """
    Fold a finished session into the application state.

    Records the presented workout and the post-session soreness for
    ``date_key``, advances the rotation to the day that was trained, makes
    ``plan`` the active plan, and consumes any next-day override.

    Args:
        state: Current state
        plan: Plan the session came from
        workout: Exactly what was presented
        mode: Mode the session was run in
        soreness: Soreness reported after the session
        date_key: Local YYYY-MM-DD
        title: Display title for the journal

    Returns:
        New AppState (input is not modified)
    """
    entry = WorkoutLogEntry(
        date_key=date_key,
        plan_id=plan.id,
        day=workout.day,
        mode=mode,
        title=title,
        items=tuple(workout.items),
    )
    return state.with_changes(
        last_day=workout.day,
        soreness=dict(soreness),
        soreness_log=record_soreness(state.soreness_log, date_key, soreness),
        workout_log=record_session(state.workout_log, entry),
        active_plan_id=plan.id,
        day_override=None,
    )


def entries_by_date(log: Iterable[WorkoutLogEntry]) -> dict[str, WorkoutLogEntry]:
    """
    Index a session log by date key; the first entry seen for a date wins.

    Used by the calendar view, which expects the newest-first log.
    """
    result: dict[str, WorkoutLogEntry] = {}
    for entry in log:
        result.setdefault(entry.date_key, entry)
    return result
