"""
Resolve a plan + day key + mode into today's concrete item list.

Static plans serve authored content; the generated plan is driven by the
rotation, so the resolver asks the generator for "the day after the key
preceding the requested one".
"""

import warnings
from collections.abc import Mapping

from .generator import GENERATED_DAY_TITLES, generate_workout, insert_before_finisher
from .models import GeneratedPlan, Mode, StaticPlan, StaticPlanDay, Workout, WorkoutPlan
from .rotation import previous_day


def _static_day(plan: StaticPlan, day_key: str) -> StaticPlanDay | None:
    """
    Look up a static day, falling back to the plan's first day key.

    The fallback serves another day's content under the requested label, so
    it is reported with a warning.
    """
    found = plan.days.get(day_key)
    if found is not None:
        return found

    if plan.day_keys:
        fallback_key = plan.day_keys[0]
    elif plan.days:
        fallback_key = next(iter(plan.days))
    else:
        return None

    warnings.warn(
        f"training-os: plan '{plan.id}' has no day '{day_key}'; "
        f"serving day '{fallback_key}' instead",
        stacklevel=3,
    )
    return plan.days.get(fallback_key)


def resolve_workout(
    plan: WorkoutPlan,
    day_key: str,
    mode: Mode,
    soreness: Mapping[str, str] | None = None,
    last_day: str | None = None,
) -> Workout:
    """
    Return the workout for ``day_key`` of ``plan``.

    Static plans: the returned day is always the requested key, even when the
    content came from the fallback day.  The per-day bonus item is inserted
    before the last finisher in high-performance mode.

    Generated plans: the generator is asked for the successor of the key that
    precedes ``day_key``, which lands on ``day_key`` unless the soreness policy
    moves it.  ``last_day`` is only consulted if the plan has no day keys.

    Args:
        plan: Active plan
        day_key: Requested day key
        mode: "base" or "high_performance"
        soreness: Current soreness map
        last_day: Day key of the last logged session

    Returns:
        Workout (day key + items); inputs are never modified
    """
    if isinstance(plan, StaticPlan):
        day = _static_day(plan, day_key)
        items = day.items if day is not None else ()
        bonus = plan.bonus_by_day.get(day_key)
        if mode == "high_performance" and bonus is not None:
            items = insert_before_finisher(items, bonus)
        return Workout(day=day_key, items=tuple(items))

    prev_key = previous_day(plan.day_keys, day_key) if plan.day_keys else last_day
    return generate_workout(last_day=prev_key, mode=mode, soreness=soreness)


def day_title_for_plan(plan: WorkoutPlan, day_key: str) -> str:
    """
    Human-friendly title for a plan's day.

    Static plans use the authored title (with the same fallback as
    resolve_workout); the generated plan uses its built-in title table.
    """
    if isinstance(plan, GeneratedPlan):
        return GENERATED_DAY_TITLES.get(day_key, f"Day {day_key}")

    day = plan.days.get(day_key)
    if day is None:
        fallback_key = plan.day_keys[0] if plan.day_keys else next(iter(plan.days), None)
        day = plan.days.get(fallback_key) if fallback_key is not None else None
    return day.title if day is not None and day.title else f"Day {day_key}"
