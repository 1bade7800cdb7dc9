"""
Built-in plan registry.

Built-in plans are loaded from the bundled YAML files at import time.  If
nothing can be loaded a RuntimeError is raised: the application cannot start
without its default plan.
"""

from ..models import WorkoutPlan


def _build_registry() -> tuple[WorkoutPlan, ...]:
    from .loader import load_builtin_plans

    loaded = load_builtin_plans()
    if not loaded:
        raise RuntimeError(
            "training-os: no built-in plans could be loaded from YAML. "
            "Check that src/training_os/plans/*.yaml files are present and valid."
        )
    return tuple(loaded)


BUILTIN_PLANS: tuple[WorkoutPlan, ...] = _build_registry()

