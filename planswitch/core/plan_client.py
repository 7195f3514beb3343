"""
HTTP client for the remote plan endpoints.
"""

import time
from typing import Any, Dict, Optional

import httpx

from planswitch.config import API_URL, HTTP_TIMEOUT, logger
from planswitch.core.errors import PlanServiceError
from planswitch.core.plans.models import AccountPlanState, CommittedPlan
from planswitch.core.plans.resolver import PlanStateResolver


class PlanClient:
    """
    Reads and sets the account plan.

    One instance serves one invocation. Call close() (or use it as a context
    manager) to release the connection.
    """

    PLAN_PATH = "/plan"

    def __init__(
        self,
        token: str,
        api_url: str = API_URL,
        team_id: Optional[str] = None,
        timeout: float = HTTP_TIMEOUT,
        resolver: Optional[PlanStateResolver] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._team_id = team_id
        self._resolver = resolver or PlanStateResolver()
        self._client = httpx.Client(
            base_url=api_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "PlanClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _params(self) -> Dict[str, str]:
        return {"teamId": self._team_id} if self._team_id else {}

    def _request(self, method: str, json: Optional[Dict[str, Any]] = None) -> httpx.Response:
        start = time.monotonic()
        response = self._client.request(method, self.PLAN_PATH, params=self._params(), json=json)
        logger.debug(
            "%s %s -> %d (%.0f ms)",
            method,
            self.PLAN_PATH,
            response.status_code,
            (time.monotonic() - start) * 1000,
        )
        return response

    def get_current(self) -> AccountPlanState:
        """
        Fetch the account's current plan state.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx response
        """
        response = self._request("GET")
        response.raise_for_status()
        return self._resolver.resolve(response.json())

    def set_plan(self, plan_id: str) -> CommittedPlan:
        """
        Ask the service to switch the account to plan_id.

        Returns:
            The plan the service committed

        Raises:
            PlanServiceError: If the service refuses the change
            httpx.HTTPError: On transport failure
        """
        response = self._request("PUT", json={"plan": plan_id})
        if response.is_success:
            return self._resolver.resolve_committed(response.json())

        try:
            body = response.json()
        except ValueError:
            body = {}
        error = (body.get("error") if isinstance(body, dict) else None) or {}
        message = error.get("message") or f"Plan change failed with status {response.status_code}"
        logger.info("Plan change to %s refused: %s (%s)", plan_id, message, error.get("code"))
        raise PlanServiceError(message, code=error.get("code"))
