"""
Data models for training-os.

All core dataclasses representing exercise items, plans, generated workouts
and the persisted application state.  Plans form a tagged union on ``kind``:
validation happens once at the boundary (upload / load) and the engine trusts
these types afterwards.
"""

from dataclasses import dataclass, field, replace
from typing import Literal, Union

from .config import DEFAULT_PLAN_ID

Mode = Literal["base", "high_performance"]
Soreness = Literal["green", "yellow", "red"]
Slot = Literal["prep", "strength", "athletic", "finish"]
MovementPattern = Literal[
    "acceleration",
    "deceleration",
    "rotation",
    "anti_rotation",
    "single_leg",
    "elastic_power",
    "foot_ankle",
    "shoulder_stability",
]

# Partial map: patterns that are absent count as "green"
SorenessMap = dict[str, Soreness]


@dataclass(frozen=True)
class ExerciseItem:
    """
    One unit of work inside a day's list.

    ``dose`` is free text (sets/reps/time) and is never parsed.
    """

    id: str
    slot: Slot
    name: str
    dose: str
    equipment: str | None = None
    description: str | None = None
    hint: str | None = None


@dataclass(frozen=True)
class StaticPlanDay:
    """Titled, ordered item list for one day key of a static plan."""

    title: str
    items: tuple[ExerciseItem, ...] = ()


@dataclass(frozen=True)
class StaticPlan:
    """
    A plan whose per-day content is authored data.

    bonus_by_day holds the optional extra item served only in
    high-performance mode.
    """

    id: str
    name: str
    day_keys: tuple[str, ...]
    days: dict[str, StaticPlanDay]
    icon: str | None = None
    bonus_by_day: dict[str, ExerciseItem] = field(default_factory=dict)
    kind: Literal["static"] = "static"


@dataclass(frozen=True)
class GeneratedPlan:
    """A plan whose content is synthesised by the generator at request time."""

    id: str
    name: str
    day_keys: tuple[str, ...]
    icon: str | None = None
    kind: Literal["generated_v1"] = "generated_v1"


WorkoutPlan = Union[StaticPlan, GeneratedPlan]


@dataclass(frozen=True)
class Workout:
    """Resolved content for one session: the day key and its items."""

    day: str
    items: tuple[ExerciseItem, ...]


@dataclass(frozen=True)
class SorenessLogEntry:
    """Soreness snapshot for one calendar date."""

    date_key: str  # local YYYY-MM-DD
    soreness: SorenessMap


@dataclass(frozen=True)
class WorkoutLogEntry:
    """
    A logged session.

    items is the exact list that was presented, so later plan edits never
    rewrite history.
    """

    date_key: str  # local YYYY-MM-DD
    plan_id: str
    day: str
    mode: Mode
    title: str
    items: tuple[ExerciseItem, ...] = ()


@dataclass(frozen=True)
class AppState:
    """
    The single persisted record.

    Logs are kept newest-first with at most one entry per date.
    day_override is a forced day key valid for one upcoming session.
    """

    last_day: str | None = None
    soreness: SorenessMap = field(default_factory=dict)
    soreness_log: tuple[SorenessLogEntry, ...] = ()
    workout_log: tuple[WorkoutLogEntry, ...] = ()
    active_plan_id: str = DEFAULT_PLAN_ID
    day_override: str | None = None

    def with_changes(self, **changes) -> "AppState":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)
