"""HTTP client for the flowcheck service.

Usage:

    from flowcheck.sdk import FlowcheckClient

    with FlowcheckClient() as client:
        outcome = client.validate(flow)
        if outcome.ok:
            print(outcome.value.score)
        else:
            print(outcome.error)

Every call returns a RemoteResult holding either the decoded value or an
error message; network and HTTP failures are not raised.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx
from pydantic import ValidationError

from flowcheck.analysis.complexity import ComplexityStrategy
from flowcheck.models.validation import ValidationResult
from flowcheck.models.workflow_graph import FlowData

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"

T = TypeVar("T")


@dataclass
class RemoteResult(Generic[T]):
    """Outcome of a service call: a value, or an error message."""

    value: T | None = None
    error: str | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FlowcheckClient:
    """Synchronous client for the /api/workflows endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize a new client.

        Args:
            base_url: service root. Defaults to FLOWCHECK_URL, then localhost:8000.
            timeout: request timeout in seconds, for the client created here.
            http_client: an existing httpx client to send requests with.
        """
        self.base_url = (base_url or os.getenv("FLOWCHECK_URL", DEFAULT_BASE_URL)).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> FlowcheckClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(
        self,
        path: str,
        payload: dict,
        params: dict | None = None,
    ) -> RemoteResult[Any]:
        url = f"{self.base_url}/api{path}"
        try:
            response = self._client.post(url, json=payload, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("request to %s failed with status %d", url, status)
            return RemoteResult(error=_error_detail(exc.response), status_code=status)
        except httpx.HTTPError as exc:
            logger.warning("request to %s failed: %s", url, exc)
            return RemoteResult(error=f"failed to reach flowcheck at {self.base_url}: {exc}")
        try:
            body = response.json()
        except ValueError as exc:
            logger.warning("response from %s is not JSON: %s", url, exc)
            return RemoteResult(
                error=f"unexpected response: not JSON ({exc})",
                status_code=response.status_code,
            )
        return RemoteResult(value=body, status_code=response.status_code)

    def validate(
        self, flow: FlowData, report_dangling: bool = False
    ) -> RemoteResult[ValidationResult]:
        """Validate a workflow on the server."""
        outcome = self._post(
            "/workflows/validate",
            _flow_payload(flow),
            params={"report_dangling": str(report_dangling).lower()},
        )
        if not outcome.ok:
            return outcome
        try:
            value = ValidationResult.model_validate(outcome.value)
        except ValidationError as exc:
            return RemoteResult(error=f"unexpected response: {exc}", status_code=outcome.status_code)
        return RemoteResult(value=value, status_code=outcome.status_code)

    def complexity(
        self,
        flow: FlowData,
        strategy: ComplexityStrategy = ComplexityStrategy.layout_depth,
    ) -> RemoteResult[int]:
        """Complexity score of a workflow under the given strategy."""
        outcome = self._post(
            "/workflows/complexity",
            _flow_payload(flow),
            params={"strategy": ComplexityStrategy(strategy).value},
        )
        if not outcome.ok:
            return outcome
        try:
            score = int(outcome.value["score"])
        except (KeyError, TypeError, ValueError) as exc:
            return RemoteResult(
                error=f"unexpected response: no score ({exc!r})",
                status_code=outcome.status_code,
            )
        return RemoteResult(value=score, status_code=outcome.status_code)

    def analyze(self, flow: FlowData) -> RemoteResult[dict]:
        """Full heuristic analysis of a workflow, as a dict."""
        outcome = self._post("/workflows/analyze", _flow_payload(flow))
        if outcome.ok and not isinstance(outcome.value, dict):
            return RemoteResult(
                error="unexpected response: expected a JSON object",
                status_code=outcome.status_code,
            )
        return outcome


def _flow_payload(flow: FlowData) -> dict:
    return flow.model_dump(mode="json", by_alias=True, exclude_none=True)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    return str(detail) if detail else f"HTTP {response.status_code}"
