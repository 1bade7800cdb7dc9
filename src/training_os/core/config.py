"""
Configuration constants for the training-os engine.

All adjustable parameters are centralized here.  User-level overrides
(default mode / plan) live in settings.yaml, see core/settings.py.
"""

from typing import Final

# =============================================================================
# DAY ROTATION
# =============================================================================

FALLBACK_DAY_KEY: Final[str] = "A"  # Used when a plan declares no day keys
GENERATED_DAY_ORDER: Final[tuple[str, ...]] = ("A", "B", "C", "D")

# =============================================================================
# SORENESS POLICY
# =============================================================================

# One rule only: red shoulders move the shoulder day to its safe alternative.
SORENESS_GUARD_PATTERN: Final[str] = "shoulder_stability"
SORENESS_GUARD_LEVEL: Final[str] = "red"
SHOULDER_DAY_KEY: Final[str] = "C"
SHOULDER_SUBSTITUTE_DAY_KEY: Final[str] = "D"

MOVEMENT_PATTERNS: Final[tuple[str, ...]] = (
    "acceleration",
    "deceleration",
    "rotation",
    "anti_rotation",
    "single_leg",
    "elastic_power",
    "foot_ankle",
    "shoulder_stability",
)

PATTERN_LABELS: Final[dict[str, str]] = {
    "acceleration": "Acceleration",
    "deceleration": "Deceleration",
    "rotation": "Rotation",
    "anti_rotation": "Anti-rotation",
    "single_leg": "Single-leg",
    "elastic_power": "Elastic",
    "foot_ankle": "Foot/ankle",
    "shoulder_stability": "Shoulders",
}

SORENESS_LEVELS: Final[tuple[str, ...]] = ("green", "yellow", "red")
DEFAULT_SORENESS: Final[str] = "green"

# =============================================================================
# MODES
# =============================================================================

MODES: Final[tuple[str, ...]] = ("base", "high_performance")
DEFAULT_MODE: Final[str] = "base"

# CLI spellings accepted for each mode
MODE_ALIASES: Final[dict[str, str]] = {
    "base": "base",
    "standard": "base",
    "std": "base",
    "high_performance": "high_performance",
    "high-performance": "high_performance",
    "high": "high_performance",
    "hp": "high_performance",
}

# =============================================================================
# ITEM SLOTS
# =============================================================================

SLOTS: Final[tuple[str, ...]] = ("prep", "strength", "athletic", "finish")
FINISH_SLOT: Final[str] = "finish"

SLOT_ALIASES: Final[dict[str, str]] = {
    "warm-up": "prep",
    "warmup": "prep",
    "warm_up": "prep",
    "finisher": "finish",
}

SLOT_LABELS: Final[dict[str, str]] = {
    "prep": "Warm-up",
    "strength": "Strength",
    "athletic": "Athletic",
    "finish": "Finisher",
}

# =============================================================================
# PLANS
# =============================================================================

DEFAULT_PLAN_ID: Final[str] = "functional-fitness-45"
STATIC_KIND: Final[str] = "static"
GENERATED_KIND: Final[str] = "generated_v1"

# =============================================================================
# STORAGE
# =============================================================================

DATA_DIR_ENV: Final[str] = "TRAINING_OS_HOME"
DEFAULT_DATA_DIRNAME: Final[str] = ".training-os"
STATE_FILENAME: Final[str] = "state.json"
PLANS_FILENAME: Final[str] = "plans.json"
LOAD_NOTES_FILENAME: Final[str] = "load_notes.json"
SETTINGS_FILENAME: Final[str] = "settings.yaml"
