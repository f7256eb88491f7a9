from __future__ import annotations

import logging
from typing import Final

import httpx

from refgate.issues import IssueKey

from .results import AuthFailure, TrackerAnswer, TrackerResult, TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
_AUTH_STATUS_CODES: Final[frozenset[int]] = frozenset({401, 403})


class JiraRestTracker:
    """Issue tracker backed by the Jira REST API (v2).

    Every call returns a tracker result; HTTP and network errors are mapped to
    ``AuthFailure`` or ``TransportFailure`` and never raised. No retries are made.
    """

    def __init__(
        self,
        base_url: str,
        *,
        auth_url: str | None = None,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.auth_url = auth_url or f"{self.base_url}/login.jsp"
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = headers

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> JiraRestTracker:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def link_exists(self) -> bool:
        return bool(self.base_url)

    def issue_exists(self, key: IssueKey) -> TrackerResult:
        return self._exists(f"/rest/api/2/issue/{key}", params={"fields": "summary"})

    def project_exists(self, project_key: str) -> TrackerResult:
        return self._exists(f"/rest/api/2/project/{project_key}")

    def matches_query(self, query: str, key: IssueKey) -> TrackerResult:
        jql = f"issueKey={key} AND ({query})"
        response = self._get("/rest/api/2/search", params={"jql": jql, "maxResults": 0})
        if not isinstance(response, httpx.Response):
            return response
        if response.status_code == httpx.codes.BAD_REQUEST:
            logger.warning(
                "issueJqlMatcher rejected by tracker, check the setting jql=%s status=%s",
                jql,
                response.status_code,
            )
            return TrackerAnswer(False)
        if response.status_code != httpx.codes.OK:
            return _unexpected_status(response)
        try:
            total = int(response.json().get("total", 0))
        except (ValueError, TypeError, AttributeError) as exc:
            return TransportFailure(
                detail=f"malformed search response: {exc}",
                error_type=type(exc).__name__,
            )
        return TrackerAnswer(total > 0)

    def _exists(self, path: str, params: dict[str, str | int] | None = None) -> TrackerResult:
        response = self._get(path, params=params)
        if not isinstance(response, httpx.Response):
            return response
        if response.status_code == httpx.codes.OK:
            return TrackerAnswer(True)
        if response.status_code == httpx.codes.NOT_FOUND:
            return TrackerAnswer(False)
        return _unexpected_status(response)

    def _get(
        self,
        path: str,
        params: dict[str, str | int] | None = None,
    ) -> httpx.Response | AuthFailure | TransportFailure:
        url = f"{self.base_url}{path}"
        try:
            response = self._client.get(url, params=params, headers=self._headers)
        except httpx.HTTPError as exc:
            return TransportFailure(
                detail=f"GET {url} failed: {exc}",
                error_type=type(exc).__name__,
            )
        if response.status_code in _AUTH_STATUS_CODES:
            return AuthFailure(
                auth_url=self.auth_url,
                detail=f"GET {url} answered {response.status_code}",
            )
        return response


def _unexpected_status(response: httpx.Response) -> TransportFailure:
    return TransportFailure(
        detail=f"GET {response.request.url} answered unexpected status {response.status_code}",
        error_type="HTTPStatusError",
    )
