"""
Day selection: cyclic rotation plus the soreness safety valve.

Both functions are total and side-effect free.
"""

from collections.abc import Mapping, Sequence

from .config import (
    DEFAULT_SORENESS,
    FALLBACK_DAY_KEY,
    SHOULDER_DAY_KEY,
    SHOULDER_SUBSTITUTE_DAY_KEY,
    SORENESS_GUARD_LEVEL,
    SORENESS_GUARD_PATTERN,
)


def next_day(order: Sequence[str], last: str | None = None) -> str:
    """
    Return the day key that follows ``last`` in ``order``, wrapping around.

    Args:
        order: Plan's day keys in rotation order
        last: Day key trained most recently (None on first use)

    Returns:
        FALLBACK_DAY_KEY for an empty order, order[0] when last is absent or
        unknown, otherwise the cyclic successor of last.
    """
    if not order:
        return FALLBACK_DAY_KEY
    if last is None or last not in order:
        return order[0]
    idx = list(order).index(last)
    return order[(idx + 1) % len(order)]


def previous_day(order: Sequence[str], key: str) -> str:
    """
    Return the day key preceding ``key`` in ``order``, wrapping around.

    A key that is missing from order (or is the first one) maps to the last
    key, so next_day(order, previous_day(order, order[0])) == order[0].
    """
    if not order:
        return FALLBACK_DAY_KEY
    keys = list(order)
    idx = keys.index(key) if key in keys else -1
    return keys[-1] if idx <= 0 else keys[idx - 1]


def apply_soreness_override(day: str, soreness: Mapping[str, str] | None) -> str:
    """
    Move the shoulder day to its substitute when shoulders are at red.

    Any other combination returns ``day`` unchanged.
    """
    level = (soreness or {}).get(SORENESS_GUARD_PATTERN, DEFAULT_SORENESS)
    if level == SORENESS_GUARD_LEVEL and day == SHOULDER_DAY_KEY:
        return SHOULDER_SUBSTITUTE_DAY_KEY
    return day


def planned_day(
    order: Sequence[str],
    last_day: str | None,
    soreness: Mapping[str, str] | None = None,
    day_override: str | None = None,
) -> str:
    """
    Compute the day key the next session should train.

    A user-forced override takes priority over the rotation; the soreness
    policy then applies to whichever key was chosen.

    Args:
        order: Active plan's day keys
        last_day: Day key of the last logged session
        soreness: Current soreness map
        day_override: Forced key for the next session, if any

    Returns:
        Day key
    """
    computed = day_override if day_override else next_day(order, last_day)
    return apply_soreness_override(computed, soreness)
