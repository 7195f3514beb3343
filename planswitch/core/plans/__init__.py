"""
Plan Management Module

Plan catalog, remote state normalization and the transition decision engine.
"""

from planswitch.core.plans.catalog import PlanCatalog
from planswitch.core.plans.models import (
    AccountPlanState,
    CommittedPlan,
    OutcomeTag,
    Plan,
    PlanId,
    TransitionOutcome,
)
from planswitch.core.plans.resolver import PlanStateResolver
from planswitch.core.plans.service import TransitionDecisionEngine

__all__ = [
    "AccountPlanState",
    "CommittedPlan",
    "OutcomeTag",
    "Plan",
    "PlanCatalog",
    "PlanId",
    "PlanStateResolver",
    "TransitionDecisionEngine",
    "TransitionOutcome",
]
