"""
Plan Models

Type-safe models for plan tiers, account plan state and transition outcomes.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PlanId(str, Enum):
    """Plan tiers in display order. OSS is the free base tier."""
    OSS = "oss"
    PREMIUM = "premium"
    PRO = "pro"
    ADVANCED = "advanced"


class OutcomeTag(str, Enum):
    """Result of applying a plan request to the current account state."""
    NO_CHANGE = "no_change"
    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    CANCELLATION_UNDONE = "cancellation_undone"


class Plan(BaseModel):
    """Represents a subscription tier from the catalog."""

    model_config = ConfigDict(frozen=True)

    id: PlanId = Field(..., description="Plan identifier")
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    price_monthly: int = Field(..., ge=0, description="Monthly price in USD")

    @property
    def price_label(self) -> str:
        """Price as shown next to the name, e.g. 'FREE' or '$15'."""
        if self.price_monthly == 0:
            return "FREE"
        return f"${self.price_monthly}"


class AccountPlanState(BaseModel):
    """
    Billing status of one account at a point in time.

    pending_id and effective_at are both set when a plan change is scheduled
    and both None otherwise.
    """

    model_config = ConfigDict(frozen=True)

    active_id: str = Field(..., description="Plan currently in effect")
    pending_id: Optional[str] = Field(None, description="Plan the account will move to")
    effective_at: Optional[str] = Field(None, description="When the pending change happens, e.g. '3 days'")

    @model_validator(mode="after")
    def check_pending_pair(self) -> "AccountPlanState":
        if (self.pending_id is None) != (self.effective_at is None):
            raise ValueError("pending_id and effective_at must be set together")
        return self

    @property
    def has_pending(self) -> bool:
        return self.pending_id is not None


class CommittedPlan(BaseModel):
    """Plan descriptor returned by the remote service after a plan change."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    until: Optional[str] = Field(None, description="Set when the change was scheduled, not applied")


class TransitionOutcome(BaseModel):
    """What happened to the account's plan, for display."""

    model_config = ConfigDict(frozen=True)

    tag: OutcomeTag
    plan_id: str
    plan_name: str
    until: Optional[str] = None
