"""
JSON-based storage for application state, user plans and load notes.

Three files live in the data directory:
- state.json       the single application-state record
- plans.json       user-uploaded plans (JSON array)
- load_notes.json  free-text load notes keyed by exercise name

Reads are defensive: a missing or corrupt file yields defaults, never an
error.  Writes are fire-and-forget: an OSError is reported as a warning and
swallowed, so the in-memory state stays authoritative for the session.
"""

import json
import os
import warnings
from pathlib import Path
from typing import Any

from ..core.config import (
    DATA_DIR_ENV,
    DEFAULT_DATA_DIRNAME,
    LOAD_NOTES_FILENAME,
    PLANS_FILENAME,
    STATE_FILENAME,
)
from ..core.models import AppState, WorkoutPlan
from .serializers import (
    app_state_to_dict,
    dict_to_app_state,
    dict_to_plan,
    is_plan_shape_safe,
    plan_to_dict,
    state_patch_to_dict,
)


def _read_json(path: Path) -> Any:
    """Parse a JSON file; return None if it is missing or unreadable."""
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return None


def _write_json(path: Path, data: Any) -> bool:
    """
    Write data as JSON, creating parent directories.

    Returns:
        True on success; False (with a warning) if the write failed
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return True
    except OSError as e:
        warnings.warn(f"training-os: could not write {path}: {e}", stacklevel=3)
        return False


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        warnings.warn(f"training-os: could not remove {path}: {e}", stacklevel=3)


class StateStore:
    """
    Repository for the persisted AppState.

    The engine never touches files; callers load(), transform the state, and
    save() it back in one step per action.
    """

    def __init__(self, state_path: str | Path):
        """
        Initialize the state store.

        Args:
            state_path: Path to state.json
        """
        self.state_path = Path(state_path)

    def exists(self) -> bool:
        """Check if the state file exists."""
        return self.state_path.exists()

    def load(self) -> AppState:
        """
        Load the application state.

        Returns:
            Sanitised AppState; defaults if the file is missing or corrupt
        """
        return dict_to_app_state(_read_json(self.state_path))

    def save(self, state: AppState | None = None, **patch: Any) -> bool:
        """
        Persist state.

        Either pass a full AppState, or keyword fields to patch onto the
        record currently on disk:
            store.save(new_state)
            store.save(active_plan_id="midday-tuneup", day_override=None)

        Args:
            state: Full state to write
            **patch: AppState field names and values

        Returns:
            True if the write succeeded

        Raises:
            ValidationError: If the patch names an unknown field
        """
        if state is None:
            data = app_state_to_dict(self.load())
            data.update(state_patch_to_dict(patch))
        else:
            data = app_state_to_dict(state.with_changes(**patch) if patch else state)
        return _write_json(self.state_path, data)

    def reset(self) -> None:
        """Delete the state file (workout data only)."""
        _remove(self.state_path)


class PlanStore:
    """Persistence for user-uploaded plans."""

    def __init__(self, plans_path: str | Path):
        self.plans_path = Path(plans_path)

    def load_plans(self) -> list[WorkoutPlan]:
        """
        Load user plans.

        Records that fail the plan shape check are dropped silently so a
        corrupted or legacy record can never break plan listing.
        """
        raw = _read_json(self.plans_path)
        if not isinstance(raw, list):
            return []
        return [dict_to_plan(p) for p in raw if is_plan_shape_safe(p)]

    def save_plans(self, plans: list[WorkoutPlan]) -> bool:
        """Write the full user-plan list."""
        return _write_json(self.plans_path, [plan_to_dict(p) for p in plans])

    def clear(self) -> None:
        """Delete all user plans."""
        _remove(self.plans_path)


class LoadNoteStore:
    """
    Free-text load notes ("50s", "135x5") keyed by exercise name.

    Keyed by name rather than item id so a note follows the exercise across
    plans.
    """

    def __init__(self, notes_path: str | Path):
        self.notes_path = Path(notes_path)

    def load_all(self) -> dict[str, str]:
        """All notes; non-string entries are ignored."""
        raw = _read_json(self.notes_path)
        if not isinstance(raw, dict):
            return {}
        return {k: v for k, v in raw.items() if isinstance(k, str) and isinstance(v, str)}

    def get(self, exercise_name: str) -> str:
        """Saved load for exercise_name, or an empty string."""
        return self.load_all().get(exercise_name, "")

    def set(self, exercise_name: str, load: str) -> bool:
        """Save (or overwrite) the load for exercise_name."""
        notes = self.load_all()
        notes[exercise_name] = load
        return _write_json(self.notes_path, notes)

    def clear(self) -> None:
        """Delete all load notes."""
        _remove(self.notes_path)


def get_default_data_dir() -> Path:
    """
    Get the default data directory.

    $TRAINING_OS_HOME if set, else ~/.training-os.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_DATA_DIRNAME


class DataDir:
    """All stores rooted at one data directory."""

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root) if root is not None else get_default_data_dir()
        self.state = StateStore(self.root / STATE_FILENAME)
        self.plans = PlanStore(self.root / PLANS_FILENAME)
        self.load_notes = LoadNoteStore(self.root / LOAD_NOTES_FILENAME)

    def reset_all(self) -> None:
        """Remove state, user plans and load notes."""
        self.state.reset()
        self.plans.clear()
        self.load_notes.clear()
