"""
Plan State Resolver

Normalizes the remote service's plan responses into AccountPlanState and
CommittedPlan so nothing downstream deals with missing or partial fields.
"""

import math
import time
from typing import Any, Dict, Mapping, Optional, Tuple

from planswitch.config import logger
from planswitch.core.plans.catalog import PlanCatalog
from planswitch.core.plans.models import AccountPlanState, CommittedPlan


_SECOND = 1.0
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def _plural(seconds: float, unit: float, name: str) -> str:
    count = math.floor(seconds / unit + 0.5)
    suffix = "s" if abs(seconds) >= unit * 1.5 else ""
    return f"{count} {name}{suffix}"


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as '3 days', '1 hour', '45 seconds'."""
    magnitude = abs(seconds)
    if magnitude >= _DAY:
        return _plural(seconds, _DAY, "day")
    if magnitude >= _HOUR:
        return _plural(seconds, _HOUR, "hour")
    if magnitude >= _MINUTE:
        return _plural(seconds, _MINUTE, "minute")
    if magnitude >= _SECOND:
        return _plural(seconds, _SECOND, "second")
    return f"{int(seconds * 1000)} ms"


class PlanStateResolver:
    """Translates raw plan responses into canonical models."""

    MAIN_PLAN_FLAG = "1"

    def __init__(self, clock=time.time):
        """Initialize resolver with an injectable clock (unix seconds)."""
        self._clock = clock

    def resolve(self, raw: Optional[Mapping[str, Any]]) -> AccountPlanState:
        """
        Build the account's current plan state.

        Args:
            raw: Response body of the remote plan read

        Returns:
            AccountPlanState; a pending transition is only reported when both
            its target and its effective time are known
        """
        plan_id, _, until, pending_id = self._parse(raw)

        if not until:
            if pending_id:
                logger.debug("Ignoring scheduled plan %s without an effective time", pending_id)
            return AccountPlanState(active_id=plan_id)

        return AccountPlanState(
            active_id=plan_id,
            pending_id=pending_id or PlanCatalog.base_plan().id.value,
            effective_at=until,
        )

    def resolve_committed(self, raw: Optional[Mapping[str, Any]]) -> CommittedPlan:
        """Build the plan descriptor returned by a plan change."""
        plan_id, name, until, _ = self._parse(raw)
        return CommittedPlan(
            id=plan_id,
            name=name or PlanCatalog.display_name(plan_id),
            until=until or None,
        )

    def _parse(self, raw: Optional[Mapping[str, Any]]) -> Tuple[str, Optional[str], Optional[str], Optional[str]]:
        """Return (plan_id, name, until, pending_id) from any accepted shape."""
        if raw is None:
            return PlanCatalog.base_plan().id.value, None, None, None
        if not isinstance(raw, Mapping):
            raise ValueError(f"Unexpected plan response: {type(raw).__name__}")

        if "subscription" in raw:
            return self._parse_subscription(raw.get("subscription"))

        plan_id = raw.get("id") or PlanCatalog.base_plan().id.value
        pending_id = raw.get("pending_id") or raw.get("scheduled_plan")
        return plan_id, raw.get("name"), self._format_until(raw.get("until")), pending_id

    def _parse_subscription(self, subscription: Optional[Dict[str, Any]]) -> Tuple[str, Optional[str], Optional[str], Optional[str]]:
        base_id = PlanCatalog.base_plan().id.value
        if not subscription:
            return base_id, None, None, None

        items = (subscription.get("items") or {}).get("data") or []
        main_plan = None
        for item in items:
            plan = item.get("plan") or {}
            if (plan.get("metadata") or {}).get("is_main_plan") == self.MAIN_PLAN_FLAG:
                main_plan = plan
                break

        if main_plan is None:
            return base_id, None, None, None

        until = None
        period_end = subscription.get("current_period_end")
        if subscription.get("cancel_at_period_end") and period_end is not None:
            until = format_duration(max(0.0, float(period_end) - self._clock()))

        return main_plan.get("id") or base_id, main_plan.get("name"), until, None

    @staticmethod
    def _format_until(value: Any) -> Optional[str]:
        # Numeric values are seconds remaining
        if value is None or value == "":
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return format_duration(float(value))
        return str(value)
