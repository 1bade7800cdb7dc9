"""
JSON serialization for training-os data models.

Handles conversion between dataclasses and JSON-compatible dicts, plan
upload validation, and field-by-field sanitising of persisted state.  Wire
keys are camelCase so files stay compatible with plans exported elsewhere.
"""

import json
from typing import Any

from ..core.config import (
    DEFAULT_MODE,
    DEFAULT_PLAN_ID,
    GENERATED_KIND,
    MODE_ALIASES,
    MOVEMENT_PATTERNS,
    SLOT_ALIASES,
    SLOTS,
    SORENESS_LEVELS,
    STATIC_KIND,
)
from ..core.models import (
    AppState,
    ExerciseItem,
    GeneratedPlan,
    SorenessLogEntry,
    SorenessMap,
    StaticPlan,
    StaticPlanDay,
    WorkoutLogEntry,
    WorkoutPlan,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def _is_object(x: Any) -> bool:
    return isinstance(x, dict)


def _non_empty_string(x: Any) -> bool:
    return isinstance(x, str) and bool(x.strip())


def _safe_string(x: Any) -> str | None:
    return x if _non_empty_string(x) else None


# =============================================================================
# Scalar validators
# =============================================================================


def validate_mode(mode: str) -> str:
    """
    Validate and normalise a mode name.

    Accepts the canonical names and the CLI aliases in MODE_ALIASES
    (e.g. "standard", "hp").

    Args:
        mode: Mode string to validate

    Returns:
        "base" or "high_performance"

    Raises:
        ValidationError: If mode is unknown
    """
    normalised = MODE_ALIASES.get(str(mode).strip().lower())
    if normalised is None:
        raise ValidationError(
            f"Invalid mode: {mode}. Use one of: base, high_performance (or standard, hp)"
        )
    return normalised


def validate_soreness_level(level: str) -> str:
    """
    Validate a traffic-light soreness value.

    Raises:
        ValidationError: If level is not green, yellow or red
    """
    value = str(level).strip().lower()
    if value not in SORENESS_LEVELS:
        raise ValidationError(
            f"Invalid soreness: {level}. Must be one of {', '.join(SORENESS_LEVELS)}"
        )
    return value


def validate_pattern(pattern: str) -> str:
    """
    Validate a movement-pattern identifier (dashes are accepted for underscores).

    Raises:
        ValidationError: If pattern is not one of the 8 known patterns
    """
    value = str(pattern).strip().lower().replace("-", "_")
    if value not in MOVEMENT_PATTERNS:
        raise ValidationError(
            f"Unknown movement pattern: {pattern}. Valid: {', '.join(MOVEMENT_PATTERNS)}"
        )
    return value


def parse_soreness_pairs(pairs: list[str]) -> SorenessMap:
    """
    Parse CLI soreness arguments of the form ``pattern=level``.

    Several pairs may also be comma-separated inside one argument:
        ["shoulder_stability=red", "single_leg=yellow,rotation=green"]

    Args:
        pairs: Raw strings from the command line

    Returns:
        Soreness map (later pairs win on duplicate patterns)

    Raises:
        ValidationError: On a malformed pair, unknown pattern or level
    """
    result: SorenessMap = {}
    for raw in pairs:
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            if "=" not in part:
                raise ValidationError(f"Invalid soreness entry '{part}'. Expected pattern=level")
            pattern, level = part.split("=", 1)
            result[validate_pattern(pattern)] = validate_soreness_level(level)  # type: ignore
    return result


# =============================================================================
# Exercise items
# =============================================================================


def exercise_item_to_dict(item: ExerciseItem) -> dict[str, Any]:
    """
    Convert ExerciseItem to JSON-compatible dict (optional fields omitted when unset).
    """
    d: dict[str, Any] = {
        "id": item.id,
        "slot": item.slot,
        "name": item.name,
        "dose": item.dose,
    }
    for key in ("equipment", "description", "hint"):
        value = getattr(item, key)
        if value is not None:
            d[key] = value
    return d


def _normalise_slot(raw: Any) -> str:
    slot = str(raw).strip().lower() if raw is not None else ""
    slot = SLOT_ALIASES.get(slot, slot)
    return slot if slot in SLOTS else "strength"


def dict_to_exercise_item(data: dict[str, Any], fallback_id: str = "") -> ExerciseItem:
    """
    Convert dict to ExerciseItem.

    Lenient: uploaded items are only checked structurally, so missing text
    fields become empty strings and unknown slots read as "strength".

    Args:
        data: Dict representation
        fallback_id: Identifier to use when the record has none

    Returns:
        ExerciseItem instance
    """
    return ExerciseItem(
        id=_safe_string(data.get("id")) or fallback_id,
        slot=_normalise_slot(data.get("slot")),  # type: ignore
        name=str(data.get("name") or ""),
        dose=str(data.get("dose") or ""),
        equipment=_safe_string(data.get("equipment")),
        description=_safe_string(data.get("description")),
        hint=_safe_string(data.get("hint")),
    )


def _items_from_list(raw: Any, id_prefix: str) -> tuple[ExerciseItem, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        dict_to_exercise_item(entry, fallback_id=f"{id_prefix}{i}")
        for i, entry in enumerate(raw, 1)
        if _is_object(entry)
    )


# =============================================================================
# Plans
# =============================================================================


def validate_uploaded_plan(plan: Any) -> str | None:
    """
    Structural check for a user-supplied plan.

    Only static plans may be uploaded.  Checks stop at the first violation.

    Args:
        plan: Parsed JSON document

    Returns:
        Human-readable reason for the first violation, or None if valid
    """
    if not _is_object(plan):
        return "Plan must be a JSON object"
    if not _non_empty_string(plan.get("id")):
        return "Plan requires string id"
    if not _non_empty_string(plan.get("name")):
        return "Plan requires string name"
    if plan.get("icon") is not None and not isinstance(plan.get("icon"), str):
        return "Plan.icon must be a string if provided"
    if plan.get("kind") != STATIC_KIND:
        return "Only static plans are supported for upload (kind: 'static')"
    day_keys = plan.get("dayKeys")
    if not isinstance(day_keys, list) or len(day_keys) < 1:
        return "Plan requires dayKeys array"
    if not all(_non_empty_string(k) for k in day_keys):
        return "Plan dayKeys must be non-empty strings"
    days = plan.get("days")
    if not _is_object(days):
        return "Plan requires days object"
    for key in day_keys:
        day = days.get(key)
        if day is None or (not _is_object(day) and not day):
            return f"Missing days['{key}']"
        if not _is_object(day) or not isinstance(day.get("title"), str):
            return f"days['{key}'].title must be a string"
        if not day["title"].strip():
            return f"days['{key}'].title must not be empty"
        if not isinstance(day.get("items"), list):
            return f"days['{key}'].items must be an array"
    return None


def is_plan_shape_safe(plan: Any, allow_generated: bool = False) -> bool:
    """
    Shape filter for persisted plan records.

    Every plan that passes upload validation passes here too.  User records
    must be static; the generated kind is accepted only with allow_generated,
    which the bundled plan loader sets.  Records failing it are dropped.
    """
    if not _is_object(plan):
        return False
    if not _non_empty_string(plan.get("id")) or not _non_empty_string(plan.get("name")):
        return False

    day_keys = plan.get("dayKeys")
    if not isinstance(day_keys, list) or not day_keys:
        return False
    if not all(_non_empty_string(k) for k in day_keys):
        return False

    kind = plan.get("kind")
    if kind == GENERATED_KIND and allow_generated:
        return True
    if kind != STATIC_KIND:
        return False

    days = plan.get("days")
    if not _is_object(days):
        return False
    for key in day_keys:
        day = days.get(key)
        if not _is_object(day):
            return False
        if not _non_empty_string(day.get("title")):
            return False
        if not isinstance(day.get("items"), list):
            return False
    return True


def dict_to_plan(data: dict[str, Any], allow_generated: bool = False) -> WorkoutPlan:
    """
    Convert a plan record to a StaticPlan or GeneratedPlan.

    The record is expected to have passed is_plan_shape_safe (or upload
    validation).  ``highPerformanceExtraByDay`` is read as a legacy spelling
    of ``bonusByDay``.

    Args:
        data: Plan record
        allow_generated: Accept ``kind: generated_v1`` (bundled plans only)

    Raises:
        ValidationError: If the record is not a usable plan
    """
    if not is_plan_shape_safe(data, allow_generated=allow_generated):
        label = data.get("id", "?") if _is_object(data) else repr(data)
        raise ValidationError(f"Invalid plan record: {label}")

    day_keys = tuple(str(k) for k in data["dayKeys"])
    icon = data.get("icon") if isinstance(data.get("icon"), str) else None

    if data.get("kind") == GENERATED_KIND:
        return GeneratedPlan(id=data["id"], name=data["name"], day_keys=day_keys, icon=icon)

    days: dict[str, StaticPlanDay] = {}
    for key, raw_day in data["days"].items():
        if not _is_object(raw_day):
            continue
        days[str(key)] = StaticPlanDay(
            title=str(raw_day.get("title") or ""),
            items=_items_from_list(raw_day.get("items"), id_prefix=f"{str(key).lower()}"),
        )

    raw_bonus = data.get("bonusByDay")
    if raw_bonus is None:
        raw_bonus = data.get("highPerformanceExtraByDay")
    bonus_by_day: dict[str, ExerciseItem] = {}
    if _is_object(raw_bonus):
        for key, raw_item in raw_bonus.items():
            if _is_object(raw_item):
                bonus_by_day[str(key)] = dict_to_exercise_item(
                    raw_item, fallback_id=f"{str(key).lower()}_bonus"
                )

    return StaticPlan(
        id=data["id"],
        name=data["name"],
        day_keys=day_keys,
        days=days,
        icon=icon,
        bonus_by_day=bonus_by_day,
    )


def plan_to_dict(plan: WorkoutPlan) -> dict[str, Any]:
    """
    Convert a plan to its JSON wire shape (the upload/export format).
    """
    d: dict[str, Any] = {"id": plan.id, "name": plan.name}
    if plan.icon is not None:
        d["icon"] = plan.icon
    d["kind"] = plan.kind
    d["dayKeys"] = list(plan.day_keys)

    if isinstance(plan, StaticPlan):
        d["days"] = {
            key: {
                "title": day.title,
                "items": [exercise_item_to_dict(item) for item in day.items],
            }
            for key, day in plan.days.items()
        }
        if plan.bonus_by_day:
            d["bonusByDay"] = {
                key: exercise_item_to_dict(item) for key, item in plan.bonus_by_day.items()
            }
    return d


def plan_to_json(plan: WorkoutPlan) -> str:
    """Serialize a plan as pretty-printed JSON for export."""
    return json.dumps(plan_to_dict(plan), indent=2, ensure_ascii=False)


# =============================================================================
# Application state
# =============================================================================


def sanitize_soreness_map(raw: Any) -> SorenessMap:
    """Keep only entries whose value is a valid soreness level."""
    if not _is_object(raw):
        return {}
    return {str(k): v for k, v in raw.items() if v in SORENESS_LEVELS}


def sanitize_workout_log(raw: Any) -> tuple[WorkoutLogEntry, ...]:
    """
    Rebuild the workout log from an untrusted list.

    Non-object entries and entries without a date or plan id are dropped;
    other fields fall back to empty / base mode.
    """
    if not isinstance(raw, list):
        return ()
    entries: list[WorkoutLogEntry] = []
    for e in raw:
        if not _is_object(e):
            continue
        date_key = _safe_string(e.get("dateISO")) or ""
        plan_id = _safe_string(e.get("planId")) or ""
        if not date_key or not plan_id:
            continue
        mode = e.get("mode") if e.get("mode") in ("base", "high_performance") else DEFAULT_MODE
        entries.append(
            WorkoutLogEntry(
                date_key=date_key,
                plan_id=plan_id,
                day=_safe_string(e.get("day")) or "",
                mode=mode,  # type: ignore
                title=_safe_string(e.get("title")) or "",
                items=_items_from_list(e.get("items"), id_prefix="item"),
            )
        )
    return tuple(entries)


def sanitize_soreness_log(raw: Any) -> tuple[SorenessLogEntry, ...]:
    """Rebuild the soreness log, dropping entries without a date."""
    if not isinstance(raw, list):
        return ()
    entries: list[SorenessLogEntry] = []
    for e in raw:
        if not _is_object(e):
            continue
        date_key = _safe_string(e.get("dateISO"))
        if not date_key:
            continue
        entries.append(
            SorenessLogEntry(date_key=date_key, soreness=sanitize_soreness_map(e.get("soreness")))
        )
    return tuple(entries)


def workout_log_entry_to_dict(entry: WorkoutLogEntry) -> dict[str, Any]:
    """Convert WorkoutLogEntry to its wire dict."""
    return {
        "dateISO": entry.date_key,
        "planId": entry.plan_id,
        "day": entry.day,
        "mode": entry.mode,
        "title": entry.title,
        "items": [exercise_item_to_dict(item) for item in entry.items],
    }


def soreness_log_entry_to_dict(entry: SorenessLogEntry) -> dict[str, Any]:
    """Convert SorenessLogEntry to its wire dict."""
    return {"dateISO": entry.date_key, "soreness": dict(entry.soreness)}


def app_state_to_dict(state: AppState) -> dict[str, Any]:
    """
    Convert AppState to the persisted blob.

    Args:
        state: AppState to convert

    Returns:
        Dict representation
    """
    d: dict[str, Any] = {}
    if state.last_day is not None:
        d["lastDay"] = state.last_day
    d["soreness"] = dict(state.soreness)
    d["sorenessLog"] = [soreness_log_entry_to_dict(e) for e in state.soreness_log]
    d["workoutLog"] = [workout_log_entry_to_dict(e) for e in state.workout_log]
    d["activePlanId"] = state.active_plan_id
    d["dayOverride"] = state.day_override
    return d


def dict_to_app_state(data: Any) -> AppState:
    """
    Convert a persisted blob to AppState, sanitising field by field.

    Never raises: anything that doesn't match the expected shape is replaced
    by its default.

    Args:
        data: Parsed JSON (any type)

    Returns:
        AppState instance
    """
    if not _is_object(data):
        return AppState()

    return AppState(
        last_day=_safe_string(data.get("lastDay")),
        soreness=sanitize_soreness_map(data.get("soreness")),
        soreness_log=sanitize_soreness_log(data.get("sorenessLog")),
        workout_log=sanitize_workout_log(data.get("workoutLog")),
        active_plan_id=_safe_string(data.get("activePlanId")) or DEFAULT_PLAN_ID,
        day_override=_safe_string(data.get("dayOverride")),
    )


_STATE_FIELD_KEYS: dict[str, str] = {
    "last_day": "lastDay",
    "soreness": "soreness",
    "soreness_log": "sorenessLog",
    "workout_log": "workoutLog",
    "active_plan_id": "activePlanId",
    "day_override": "dayOverride",
}


def state_patch_to_dict(patch: dict[str, Any]) -> dict[str, Any]:
    """
    Convert a partial AppState patch (snake_case field names) to wire keys.

    Raises:
        ValidationError: If the patch names an unknown field
    """
    unknown = set(patch) - set(_STATE_FIELD_KEYS)
    if unknown:
        raise ValidationError(f"Unknown state fields: {sorted(unknown)}")
    full = app_state_to_dict(AppState().with_changes(**patch))
    result = {_STATE_FIELD_KEYS[k]: full.get(_STATE_FIELD_KEYS[k]) for k in patch}
    return result
