import httpx
import pytest

from planswitch.config import BILLING_COMMAND
from planswitch.core.errors import ErrorCategory, PlanServiceError, classify


class TestErrorClassifier:
    """Tests for remote error classification."""

    @pytest.mark.parametrize("code", ["customer_not_found", "source_not_found"])
    def test_no_payment_method(self, code):
        result = classify(PlanServiceError("Missing source", code=code))
        assert result.category == ErrorCategory.NO_PAYMENT_METHOD
        assert result.remediation == BILLING_COMMAND
        assert BILLING_COMMAND in result.message

    @pytest.mark.parametrize("code", ["rate_limited", "plan_not_found", "forbidden"])
    def test_other_codes_are_unknown(self, code):
        result = classify(PlanServiceError("Something broke", code=code))
        assert result.category == ErrorCategory.UNKNOWN
        assert "Something broke" in result.message
        assert result.code == code

    def test_missing_code_is_unknown(self):
        result = classify(PlanServiceError("No code"))
        assert result.category == ErrorCategory.UNKNOWN
        assert result.remediation is None

    def test_transport_error_is_unknown(self):
        result = classify(httpx.ConnectError("connection refused"))
        assert result.category == ErrorCategory.UNKNOWN
        assert "connection refused" in result.message
