from __future__ import annotations

from typing import Protocol, runtime_checkable

from refgate.issues import IssueKey

from .results import TrackerResult


@runtime_checkable
class IssueTracker(Protocol):
    def link_exists(self) -> bool: ...

    def issue_exists(self, key: IssueKey) -> TrackerResult: ...

    def project_exists(self, project_key: str) -> TrackerResult: ...

    def matches_query(self, query: str, key: IssueKey) -> TrackerResult: ...
