"""
Today's session planning.

Ties the pieces together the way a front end uses them: active plan →
planned day (override, else rotation, then the soreness policy) → resolved
workout → display title.
"""

from dataclasses import dataclass

from .catalog import PlanCatalog
from .models import AppState, Mode, Workout, WorkoutPlan
from .resolver import day_title_for_plan, resolve_workout
from .rotation import planned_day


@dataclass(frozen=True)
class SessionPlan:
    """
    Everything needed to present (and later log) one session.

    ``forced`` is True when the day came from a user override rather than
    the rotation.
    """

    plan: WorkoutPlan
    day_key: str
    mode: Mode
    workout: Workout
    title: str
    forced: bool = False


def session_title(plan: WorkoutPlan, day_key: str) -> str:
    """Journal/display title, e.g. "Day C — Shoulders + Control"."""
    return f"Day {day_key} — {day_title_for_plan(plan, day_key)}"


def plan_session(
    state: AppState,
    catalog: PlanCatalog,
    mode: Mode,
    day_key: str | None = None,
) -> SessionPlan:
    """
    Work out what the next session contains.

    Args:
        state: Current application state
        catalog: Plan catalog (active plan is looked up by state.active_plan_id)
        mode: Session mode
        day_key: Explicit day to preview; bypasses rotation and override

    Returns:
        SessionPlan for the requested or planned day
    """
    plan = catalog.find(state.active_plan_id)

    if day_key is None:
        day_key = planned_day(plan.day_keys, state.last_day, state.soreness, state.day_override)
        forced = bool(state.day_override)
    else:
        forced = True

    workout = resolve_workout(
        plan, day_key, mode, soreness=state.soreness, last_day=state.last_day
    )
    return SessionPlan(
        plan=plan,
        day_key=day_key,
        mode=mode,
        workout=workout,
        title=session_title(plan, workout.day),
        forced=forced,
    )
