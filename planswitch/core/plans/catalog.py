"""
Plan Catalog

Static registry of the plan tiers offered by the service.
"""

from typing import List, Optional

from planswitch.core.plans.models import Plan, PlanId


_PLANS = (
    Plan(id=PlanId.OSS, name="OSS", price_monthly=0),
    Plan(id=PlanId.PREMIUM, name="Premium", price_monthly=15),
    Plan(id=PlanId.PRO, name="Pro", price_monthly=50),
    Plan(id=PlanId.ADVANCED, name="Advanced", price_monthly=200),
)


class PlanCatalog:
    """Lookups over the fixed set of plans."""

    _by_id = {plan.id.value: plan for plan in _PLANS}

    @classmethod
    def list_all(cls) -> List[Plan]:
        """Return all plans in display order."""
        return list(_PLANS)

    @classmethod
    def ids(cls) -> List[str]:
        return [plan.id.value for plan in _PLANS]

    @classmethod
    def is_valid_id(cls, plan_id: Optional[str]) -> bool:
        """
        Check a requested plan id.

        None is valid and means no preference was given. Ids are
        case-sensitive.
        """
        return plan_id is None or plan_id in cls._by_id

    @classmethod
    def get(cls, plan_id: str) -> Optional[Plan]:
        return cls._by_id.get(plan_id)

    @classmethod
    def base_plan(cls) -> Plan:
        """The free tier a cancelled subscription falls back to."""
        return cls._by_id[PlanId.OSS.value]

    @classmethod
    def display_name(cls, plan_id: str) -> str:
        plan = cls.get(plan_id)
        return plan.name if plan else plan_id
