"""
Exceptions and remote error classification.

Every failure is terminal for the current invocation; nothing here retries.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field

from planswitch.config import BILLING_COMMAND


class PlanSwitchError(Exception):
    """Base exception for all planswitch errors."""
    pass


class InvalidInputError(PlanSwitchError):
    """Raised when command-line input is rejected before any network call."""
    pass


class ConfigurationError(PlanSwitchError):
    """Raised when no usable credentials or config files are available."""
    pass


class PlanServiceError(PlanSwitchError):
    """Raised when the remote service refuses a plan change."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ErrorCategory(str, Enum):
    """User-facing error categories."""
    NO_PAYMENT_METHOD = "no_payment_method"
    UNKNOWN = "unknown"


class UserFacingError(BaseModel):
    """A classified failure ready for display."""

    category: ErrorCategory
    message: str = Field(..., description="Line shown to the user")
    remediation: Optional[str] = Field(None, description="Suggested next command")
    code: Optional[str] = Field(None, description="Original remote error code")


# Remote error code -> category. Unlisted codes are UNKNOWN.
ERROR_CODES: Dict[str, ErrorCategory] = {
    "customer_not_found": ErrorCategory.NO_PAYMENT_METHOD,
    "source_not_found": ErrorCategory.NO_PAYMENT_METHOD,
}


def classify(err: Exception) -> UserFacingError:
    """
    Map a failure from the remote plan-set call to a user-facing error.

    Args:
        err: PlanServiceError from the service, or any transport error

    Returns:
        UserFacingError with category, display message and optional remediation
    """
    code = getattr(err, "code", None)
    category = ERROR_CODES.get(code, ErrorCategory.UNKNOWN) if code else ErrorCategory.UNKNOWN

    if category == ErrorCategory.NO_PAYMENT_METHOD:
        return UserFacingError(
            category=category,
            message=f"You have no payment methods available. Run `{BILLING_COMMAND}` to add one",
            remediation=BILLING_COMMAND,
            code=code,
        )

    detail = getattr(err, "message", None) or str(err) or err.__class__.__name__
    return UserFacingError(
        category=ErrorCategory.UNKNOWN,
        message=f"An unknown error occurred. Please try again later ({detail})",
        code=code,
    )
