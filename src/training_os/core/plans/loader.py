"""
YAML → built-in plan loader.

Loads plan definitions from individual YAML files in the bundled
``src/training_os/plans/`` directory.  ``index.yaml`` lists the file stems in
display order; the first listed plan is the default.  Each plan file uses the
same shape as an uploaded plan JSON document (``dayKeys``, ``days``,
optional ``bonusByDay``), plus ``kind: generated_v1`` for generated plans.

Usage (internal, called by registry.py):
    from .loader import load_builtin_plans
    plans = load_builtin_plans()   # list or None on failure
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Any

import yaml

from ..models import WorkoutPlan
from ...io.serializers import ValidationError, dict_to_plan

_INDEX_FILENAME = "index.yaml"


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file; return {} on any error."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
            return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


def get_bundled_plans_dir() -> Path | None:
    """Return path to the bundled plans/ data directory, or None if not found."""
    # loader.py lives at src/training_os/core/plans/loader.py
    # three levels up → src/training_os/
    candidate = Path(__file__).parent.parent.parent / "plans"
    return candidate if candidate.is_dir() else None


def _ordered_stems(plans_dir: Path) -> list[str]:
    """Stems from index.yaml, followed by any unlisted plan files (sorted)."""
    index = _load_yaml_file(plans_dir / _INDEX_FILENAME)
    listed = [str(s) for s in index.get("plans", []) if isinstance(s, str)]
    extra = sorted(
        p.stem
        for p in plans_dir.glob("*.yaml")
        if p.name != _INDEX_FILENAME and p.stem not in listed
    )
    return listed + extra


def load_builtin_plans(plans_dir: Path | None = None) -> list[WorkoutPlan] | None:
    """
    Return the built-in plans loaded from per-plan YAML files.

    Files that are missing, unparseable, or fail the plan shape check are
    skipped with a warning.  Duplicate ids keep the first occurrence.

    Args:
        plans_dir: Directory to read (defaults to the bundled plans/ dir)

    Returns:
        Plans in index order, or None if nothing could be loaded
    """
    plans_dir = plans_dir or get_bundled_plans_dir()
    if plans_dir is None:
        return None

    result: list[WorkoutPlan] = []
    seen: set[str] = set()

    for stem in _ordered_stems(plans_dir):
        raw = _load_yaml_file(plans_dir / f"{stem}.yaml")
        if not raw:
            warnings.warn(f"training-os: built-in plan file '{stem}.yaml' is missing or empty", stacklevel=2)
            continue
        try:
            plan = dict_to_plan(raw, allow_generated=True)
        except ValidationError as exc:
            warnings.warn(f"training-os: skipping built-in plan '{stem}': {exc}", stacklevel=2)
            continue
        if plan.id in seen:
            continue
        seen.add(plan.id)
        result.append(plan)

    return result if result else None
