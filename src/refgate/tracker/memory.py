from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from refgate.issues import IssueKey

from .results import AuthFailure, TrackerAnswer, TrackerResult, TransportFailure

_DEFAULT_AUTH_URL = "https://jira.example.com/plugins/servlet/applinks/oauth/login-dance/authorize"


@dataclass(frozen=True, slots=True)
class TrackerCall:
    operation: str
    argument: str


class UnlinkedIssueTracker:
    def link_exists(self) -> bool:
        return False

    def issue_exists(self, key: IssueKey) -> TrackerResult:
        return TransportFailure(detail=f"issue tracker is not linked; cannot look up {key}")

    def project_exists(self, project_key: str) -> TrackerResult:
        return TransportFailure(detail=f"issue tracker is not linked; cannot look up {project_key}")

    def matches_query(self, query: str, key: IssueKey) -> TrackerResult:
        return TransportFailure(detail=f"issue tracker is not linked; cannot query {key}")


@dataclass(slots=True)
class InMemoryIssueTracker:
    issues: frozenset[str] = frozenset()
    projects: frozenset[str] | None = None
    query_matches: Mapping[str, frozenset[str]] = field(default_factory=dict)
    auth_failures: frozenset[str] = frozenset()
    transport_failures: frozenset[str] = frozenset()
    auth_url: str = _DEFAULT_AUTH_URL
    linked: bool = True
    calls: list[TrackerCall] = field(default_factory=list)

    @classmethod
    def from_fixture(cls, payload: Mapping[str, object]) -> InMemoryIssueTracker:
        projects = payload.get("projects")
        raw_queries = payload.get("query_matches") or {}
        if not isinstance(raw_queries, Mapping):
            raise ValueError("query_matches must be a mapping of query to issue keys")
        return cls(
            issues=_string_set(payload.get("issues"), field_name="issues"),
            projects=None if projects is None else _string_set(projects, field_name="projects"),
            query_matches={
                str(query): _string_set(keys, field_name=f"query_matches[{query}]")
                for query, keys in raw_queries.items()
            },
            auth_failures=_string_set(payload.get("auth_failures"), field_name="auth_failures"),
            transport_failures=_string_set(
                payload.get("transport_failures"), field_name="transport_failures"
            ),
            auth_url=str(payload.get("auth_url") or _DEFAULT_AUTH_URL),
            linked=bool(payload.get("linked", True)),
        )

    def link_exists(self) -> bool:
        self.calls.append(TrackerCall("link_exists", ""))
        return self.linked

    def issue_exists(self, key: IssueKey) -> TrackerResult:
        self.calls.append(TrackerCall("issue_exists", str(key)))
        return self._failure_for(str(key)) or TrackerAnswer(str(key) in self.issues)

    def project_exists(self, project_key: str) -> TrackerResult:
        self.calls.append(TrackerCall("project_exists", project_key))
        failure = self._failure_for(project_key)
        if failure is not None:
            return failure
        if self.projects is None:
            known = {issue.rsplit("-", 1)[0] for issue in self.issues}
            return TrackerAnswer(project_key in known)
        return TrackerAnswer(project_key in self.projects)

    def matches_query(self, query: str, key: IssueKey) -> TrackerResult:
        self.calls.append(TrackerCall("matches_query", f"{query}|{key}"))
        failure = self._failure_for(str(key))
        if failure is not None:
            return failure
        return TrackerAnswer(str(key) in self.query_matches.get(query, frozenset()))

    def called(self, operation: str) -> tuple[str, ...]:
        return tuple(call.argument for call in self.calls if call.operation == operation)

    def _failure_for(self, subject: str) -> AuthFailure | TransportFailure | None:
        if subject in self.auth_failures:
            return AuthFailure(auth_url=self.auth_url, detail=f"credentials required for {subject}")
        if subject in self.transport_failures:
            return TransportFailure(detail=f"simulated transport failure for {subject}")
        return None


def _string_set(value: object, *, field_name: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ValueError(f"{field_name} must be a list of strings")
    return frozenset(str(item) for item in value)
