"""
Plan catalog: built-in plans merged with user-uploaded plans.

User plans live in a PlanStore (io/state_store.py).  A user plan whose id
matches a built-in shadows it.  Lookups never fail; an unknown id resolves to
the default built-in plan.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..io.serializers import (
    ValidationError,
    dict_to_plan,
    plan_to_dict,
    plan_to_json,
    validate_uploaded_plan,
)
from .models import WorkoutPlan
from .plans import BUILTIN_PLANS

if TYPE_CHECKING:
    from ..io.state_store import PlanStore


class PlanCatalog:
    """
    Read/write view over built-in and user plans.

    Built-ins are immutable.  Every write goes through upload validation
    first, so an invalid plan is never persisted.
    """

    def __init__(
        self,
        store: PlanStore,
        builtins: tuple[WorkoutPlan, ...] = BUILTIN_PLANS,
    ):
        """
        Initialize the catalog.

        Args:
            store: Persistence for user plans
            builtins: Built-in plans (first one is the fallback default)
        """
        self.store = store
        self.builtins = builtins

    def user_plans(self) -> list[WorkoutPlan]:
        """User plans as stored (most recently added first)."""
        return self.store.load_plans()

    def list_all(self) -> list[WorkoutPlan]:
        """
        All plans: built-ins first, then user plans.

        A user plan with a built-in's id takes that built-in's place.
        """
        by_id: dict[str, WorkoutPlan] = {p.id: p for p in self.builtins}
        for plan in self.user_plans():
            by_id[plan.id] = plan
        return list(by_id.values())

    def find(self, plan_id: str | None = None) -> WorkoutPlan:
        """
        Return the plan with ``plan_id``, or the default built-in plan.

        Never raises.
        """
        if plan_id:
            for plan in self.list_all():
                if plan.id == plan_id:
                    return plan
        return self.builtins[0]

    def is_builtin(self, plan_id: str) -> bool:
        """True if plan_id names a shipped plan."""
        return any(p.id == plan_id for p in self.builtins)

    @staticmethod
    def validate_upload(raw: Any) -> str | None:
        """Return why ``raw`` cannot be uploaded, or None if it is acceptable."""
        return validate_uploaded_plan(raw)

    def upsert(self, plan: WorkoutPlan) -> None:
        """
        Insert or replace a user plan by id.

        Existing plans keep their position; new plans go to the front.
        """
        plans = self.user_plans()
        for i, existing in enumerate(plans):
            if existing.id == plan.id:
                plans[i] = plan
                break
        else:
            plans.insert(0, plan)
        self.store.save_plans(plans)

    def upload(self, raw: Any) -> WorkoutPlan:
        """
        Validate an uploaded plan document and store it.

        Args:
            raw: Parsed JSON document

        Returns:
            The stored plan

        Raises:
            ValidationError: With the rejection reason; nothing is written
        """
        reason = self.validate_upload(raw)
        if reason is not None:
            raise ValidationError(reason)
        plan = dict_to_plan(raw)
        self.upsert(plan)
        return plan

    def remove(self, plan_id: str) -> bool:
        """
        Delete a user plan.

        Returns:
            True if a plan was removed (built-ins cannot be removed)
        """
        plans = self.user_plans()
        kept = [p for p in plans if p.id != plan_id]
        if len(kept) == len(plans):
            return False
        self.store.save_plans(kept)
        return True

    def clear_user_plans(self) -> None:
        """Drop every user plan; built-ins are unaffected."""
        self.store.clear()

    @staticmethod
    def export_plan(plan: WorkoutPlan) -> dict[str, Any]:
        """Plan as an upload-format dict (for backup / sharing)."""
        return plan_to_dict(plan)

    @staticmethod
    def export_plan_json(plan: WorkoutPlan) -> str:
        """Plan as pretty-printed upload-format JSON."""
        return plan_to_json(plan)
