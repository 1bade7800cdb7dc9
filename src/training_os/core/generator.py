"""
Rule-based content engine for the generated plan kind.

The generator knows four fixed day templates (A-D).  Prescriptions that
differ between base and high-performance mode are written inline as
``_ByMode(base, high_performance)`` pairs and resolved once at import time
into WORKOUT_TABLE, keyed by (day, mode).  In high-performance mode one extra
weighted full-body compound is inserted before the finisher.

Output is deterministic: the same (last_day, mode, soreness) always gives the
same items in the same order.
"""

from collections.abc import Mapping, Sequence
from typing import Any, NamedTuple

from .config import FINISH_SLOT, GENERATED_DAY_ORDER, MODES
from .models import ExerciseItem, Mode, Workout
from .rotation import apply_soreness_override, next_day


class _ByMode(NamedTuple):
    """A template value that differs by mode."""

    base: Any
    high_performance: Any


def _pick(value: Any, mode: str) -> Any:
    if isinstance(value, _ByMode):
        return value.high_performance if mode == "high_performance" else value.base
    return value


# Titles for headers; the generated plan carries no titles of its own.
GENERATED_DAY_TITLES: dict[str, str] = {
    "A": "Accel + Rotation",
    "B": "Decel + Single-leg",
    "C": "Shoulders + Control",
    "D": "Elastic + Footwork",
}


_DAY_TEMPLATES: dict[str, list[dict[str, Any]]] = {
    # Day A: acceleration + rotational power
    "A": [
        {
            "id": "a1",
            "slot": "prep",
            "name": "Foot/ankle primer",
            "dose": "2–3 min",
            "equipment": "Mini band (optional)",
            "description": "Quick pulses: toe raises, ankle circles, short hops in place. "
            "Keep it springy; wake up the feet, don't fatigue them.",
        },
        {
            "id": "a2",
            "slot": "prep",
            "name": "Hip + T-spine openers",
            "dose": "5 min",
            "equipment": "None",
            "description": "World's greatest stretch + slow rotations. Long exhale, ribcage down, "
            "rotate through upper back (not low back).",
        },
        {
            "id": "a3",
            "slot": "strength",
            "name": "KB swings",
            "dose": _ByMode("3×10", "5×10"),
            "equipment": "Kettlebell",
            "description": "Hinge hard, snap hips, let the bell float. Shins mostly vertical. "
            "Stop the set when snap slows or shoulders take over.",
            "hint": "hip snap",
        },
        {
            "id": "a4",
            "slot": "strength",
            "name": "Half-kneeling Pallof press",
            "dose": _ByMode("3 sets", "4 sets"),
            "equipment": "Cable or band",
            "description": "Brace like someone's about to poke your ribs. Press straight out, "
            "don't rotate. Slow out, controlled back.",
            "hint": "anti-rotation",
        },
        {
            "id": "a5",
            "slot": "athletic",
            "name": "Med-ball rotational throw",
            "dose": _ByMode("6×2/side", "8×2/side"),
            "equipment": "Med ball + wall",
            "description": "Load hips, rotate through torso, throw like a forehand. "
            "Finish balanced; don't stumble. Reset each rep.",
            "hint": "fast but clean",
        },
        {
            "id": "a6",
            "slot": "finish",
            "name": "Offset suitcase carry",
            "dose": "3–5 carries",
            "equipment": "Dumbbell or kettlebell",
            "description": "Walk tall. Don't lean. Quiet ribs. Anti-side-bend strength for "
            "posture and back health.",
        },
    ],
    # Day B: deceleration + single-leg integrity
    "B": [
        {
            "id": "b1",
            "slot": "prep",
            "name": "Ankle + hip prep",
            "dose": "6–8 min",
            "equipment": "Box/step (optional)",
            "description": "Slow ankle rocks, supported hip airplanes and a few controlled "
            "step-downs. Joints should feel oiled, not tired.",
        },
        {
            "id": "b2",
            "slot": "strength",
            "name": "Front-foot elevated split squat",
            "dose": _ByMode("3 sets", "4 sets"),
            "equipment": "DBs + small plate/step",
            "description": "Front foot slightly elevated. Drop straight down, stay tall, drive "
            "through midfoot. Keep knee tracking over toes.",
            "hint": "controlled reps",
        },
        {
            "id": "b3",
            "slot": "strength",
            "name": "Step-downs",
            "dose": _ByMode("3×6/side", "4×6/side"),
            "equipment": "Box/step",
            "description": "Slow lower (2–3 seconds). Tap heel lightly; don't dump weight. "
            "Stand back up with the working leg.",
            "hint": "slow eccentric",
        },
        {
            "id": "b4",
            "slot": "athletic",
            "name": "Lateral bound → stick",
            "dose": _ByMode("6/side", "8/side"),
            "equipment": "None",
            "description": "Jump sideways, land quiet, freeze 1–2 seconds. Knee soft, hip back, "
            "chest proud. Own the decel.",
            "hint": "stick the landing",
        },
        {
            "id": "b5",
            "slot": "athletic",
            "name": "Shuffle → decel (3-step stop)",
            "dose": _ByMode("4 runs", "6 runs"),
            "equipment": "Floor line/cones",
            "description": "Quick shuffle 3–5 steps then hard stop in athletic stance. "
            "Brake under control like a defensive slide.",
            "hint": "quiet feet",
        },
        {
            "id": "b6",
            "slot": "finish",
            "name": "Breathing reset",
            "dose": "2 min",
            "equipment": "None",
            "description": "Nose inhale, long exhale. Let shoulders drop. Finish feeling better "
            "than you started.",
        },
    ],
    # Day C: shoulders + control
    "C": [
        {
            "id": "c1",
            "slot": "prep",
            "name": "Scap + T-spine",
            "dose": "5 min",
            "equipment": "Band (optional)",
            "description": "Scap push-ups + band pull-aparts. Smooth reps. Feel shoulder blades "
            "glide; no shrugging.",
        },
        {
            "id": "c2",
            "slot": "strength",
            "name": "Bottoms-up carry",
            "dose": _ByMode("3 carries", "4 carries"),
            "equipment": "Kettlebell",
            "description": "Elbow under wrist. Wrist stacked. Walk slow and steady. If the bell "
            "wobbles, lighten it.",
            "hint": "shoulder stability",
        },
        {
            "id": "c3",
            "slot": "strength",
            "name": "Tall-kneeling DB press",
            "dose": _ByMode("3×6", "4×6"),
            "equipment": "Dumbbells",
            "description": "Knees down, glutes tight, ribs down. Press without leaning back. "
            "Stop 1–2 reps before form breaks.",
            "hint": "no back arch",
        },
        {
            "id": "c4",
            "slot": "strength",
            "name": "1-arm cable row (pause)",
            "dose": _ByMode("3×8/side", "4×8/side"),
            "equipment": "Cable or band",
            "description": "Row to ribcage. Pause 1 second. Shoulder blade back and down, "
            "not up into your ear.",
            "hint": "pause each rep",
        },
        {
            "id": "c5",
            "slot": "athletic",
            "name": "Med-ball catch (athletic stance)",
            "dose": _ByMode("5×3", "6×3"),
            "equipment": "Med ball + partner/wall",
            "description": "Athletic stance. Catch, absorb, stabilize. Reactive stability, "
            "not max power.",
            "hint": "soft hands",
        },
        {
            "id": "c6",
            "slot": "finish",
            "name": "Alphabet (Shoulders)",
            "dose": "2–3 sets",
            "equipment": "DB",
            "description": "U, W, T, n, p.",
        },
    ],
    # Day D: elastic + footwork
    "D": [
        {
            "id": "d1",
            "slot": "prep",
            "name": "Elastic warm-up",
            "dose": "6–8 min",
            "equipment": "Jump rope (optional)",
            "description": "Light bounce: rope or pogo rhythm. Keep breathing easy. "
            "Springy calves, warm body.",
        },
        {
            "id": "d2",
            "slot": "strength",
            "name": "Pogo jumps",
            "dose": _ByMode("4×15", "6×15"),
            "equipment": "None",
            "description": "Small quick bounces. Stiff-ish ankles, soft knees. Land quiet. "
            "Stop when bounce slows.",
            "hint": "quick contacts",
        },
        {
            "id": "d3",
            "slot": "athletic",
            "name": "Ladder footwork (lateral)",
            "dose": _ByMode("6 runs", "8 runs"),
            "equipment": "Agility ladder or tape",
            "description": "Fast feet, light steps. Stay tall. Keep head steady like sport.",
            "hint": _ByMode("smooth", "speed"),
        },
        {
            "id": "d4",
            "slot": "athletic",
            "name": "Line hops (front/back)",
            "dose": _ByMode("5×20s", "6×20s"),
            "equipment": "Floor line/tape",
            "description": "Hop over a line, quick and low. Arms relaxed. Breathe. "
            "If you get sloppy, shorten the set.",
        },
        {
            "id": "d5",
            "slot": "athletic",
            "name": "Single-leg 180 (control)",
            "dose": _ByMode("4/side", "5/side"),
            "equipment": "None",
            "description": "Balance on one leg, rotate hips and shoulders together to face behind "
            "you, then return. Smooth; no wobble chase.",
            "hint": "own the turn",
        },
        {
            "id": "d6",
            "slot": "finish",
            "name": "Easy walk + breathe",
            "dose": "3 min",
            "equipment": "None",
            "description": "Downshift. Nose inhale, long exhale. Leave feeling athletic, "
            "not cooked.",
        },
    ],
}


# One extra compound per day, themed to the day's focus (high-performance only)
HIGH_PERFORMANCE_BONUS: dict[str, ExerciseItem] = {
    "A": ExerciseItem(
        id="a_hp_extra",
        slot="athletic",
        name="DB clean → push press (alternating)",
        dose="4×6/side",
        equipment="Dumbbells",
        description="Full-body power + conditioning. Clean to shoulder, then drive overhead. "
        "Brace ribs down, move fast but crisp. Stop 1–2 reps before form breaks.",
        hint="heavy + clean",
    ),
    "B": ExerciseItem(
        id="b_hp_extra",
        slot="strength",
        name="DB reverse lunge → push press (alternating)",
        dose="4×5/side",
        equipment="Dumbbells",
        description="Step back into a reverse lunge, stand tall, then drive the DB overhead. "
        "Keep ribs down. If pressing gets sloppy, switch to a strict press.",
        hint="heavy + stable",
    ),
    "C": ExerciseItem(
        id="c_hp_extra",
        slot="strength",
        name="DB thruster",
        dose="5×4",
        equipment="Dumbbells",
        description="Front squat into a smooth drive overhead. Stay tall in the torso, knees "
        "track over toes. Strength + power, not cardio flailing.",
        hint="legs + press",
    ),
    "D": ExerciseItem(
        id="d_hp_extra",
        slot="athletic",
        name="DB snatch (alternating)",
        dose="6×4/side",
        equipment="Dumbbells",
        description="Explosive hip drive to overhead in one motion. Keep the DB close, punch "
        "through at the top, reset each rep. Stop early if it turns into a shoulder grind.",
        hint="fast + crisp",
    ),
}


def _build_day(template: list[dict[str, Any]], mode: str) -> tuple[ExerciseItem, ...]:
    return tuple(
        ExerciseItem(**{k: _pick(v, mode) for k, v in entry.items()}) for entry in template
    )


WORKOUT_TABLE: dict[tuple[str, str], tuple[ExerciseItem, ...]] = {
    (day, mode): _build_day(template, mode)
    for day, template in _DAY_TEMPLATES.items()
    for mode in MODES
}


def insert_before_finisher(
    items: Sequence[ExerciseItem], extra: ExerciseItem
) -> tuple[ExerciseItem, ...]:
    """
    Insert ``extra`` just before the last finish-slot item.

    Appends at the end when the list has no finisher.  The input sequence is
    never modified.
    """
    slots = [item.slot for item in items]
    if FINISH_SLOT in slots:
        idx = len(slots) - 1 - slots[::-1].index(FINISH_SLOT)
        return (*items[:idx], extra, *items[idx:])
    return (*items, extra)


def generate_workout(
    last_day: str | None = None,
    mode: Mode = "base",
    soreness: Mapping[str, str] | None = None,
) -> Workout:
    """
    Synthesise the session that follows ``last_day``.

    Args:
        last_day: Day key of the previous session (None → day A)
        mode: "base" or "high_performance"
        soreness: Current soreness map; red shoulders move day C to D

    Returns:
        Workout with the resolved day key and its items
    """
    if mode not in MODES:
        mode = "base"
    day = apply_soreness_override(next_day(GENERATED_DAY_ORDER, last_day), soreness)
    items = WORKOUT_TABLE[(day, mode)]
    if mode == "high_performance":
        items = insert_before_finisher(items, HIGH_PERFORMANCE_BONUS[day])
    return Workout(day=day, items=items)
