"""
Plan Transition Service

Decides what a plan request does to the account and commits it through the
remote service.
"""

from typing import Optional, Protocol

from planswitch.config import logger
from planswitch.core.plans.catalog import PlanCatalog
from planswitch.core.plans.models import (
    AccountPlanState,
    CommittedPlan,
    OutcomeTag,
    TransitionOutcome,
)


class PlanSetter(Protocol):
    """Remote collaborator that commits a plan change."""

    def set_plan(self, plan_id: str) -> CommittedPlan:
        ...


class TransitionDecisionEngine:
    """
    Applies a requested plan to the current account state.

    The remote service is the only source of truth for what was committed;
    nothing is assumed locally before it answers.
    """

    def __init__(self, setter: PlanSetter):
        self._setter = setter

    def decide(self, current: AccountPlanState, requested: Optional[str]) -> Optional[TransitionOutcome]:
        """
        Decide and, when needed, commit a plan transition.

        Args:
            current: Account state fetched at the start of the invocation
            requested: Catalog plan id, or None when nothing was requested

        Returns:
            TransitionOutcome, or None when there is no request

        Raises:
            PlanServiceError: If the remote service refuses the change
        """
        if requested is None:
            return None

        # Re-requesting the active plan still goes out while a change is
        # pending, so the service can clear the schedule.
        if requested == current.active_id and not current.has_pending:
            logger.debug("Plan %s already active, nothing to send", requested)
            return TransitionOutcome(
                tag=OutcomeTag.NO_CHANGE,
                plan_id=current.active_id,
                plan_name=PlanCatalog.display_name(current.active_id),
            )

        logger.info("Requesting plan change %s -> %s", current.active_id, requested)
        committed = self._setter.set_plan(requested)
        return self.classify(current, committed)

    @staticmethod
    def classify(current: AccountPlanState, committed: CommittedPlan) -> TransitionOutcome:
        """Tag a committed plan relative to the state it replaced."""
        base_id = PlanCatalog.base_plan().id.value

        if current.has_pending and committed.id != base_id:
            tag = OutcomeTag.CANCELLATION_UNDONE
        elif committed.until:
            tag = OutcomeTag.DEFERRED
        else:
            tag = OutcomeTag.IMMEDIATE

        return TransitionOutcome(
            tag=tag,
            plan_id=committed.id,
            plan_name=committed.name,
            until=committed.until,
        )
