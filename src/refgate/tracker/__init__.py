from .jira import DEFAULT_TIMEOUT_SECONDS, JiraRestTracker
from .memory import InMemoryIssueTracker, TrackerCall, UnlinkedIssueTracker
from .protocol import IssueTracker
from .results import AuthFailure, TrackerAnswer, TrackerFailure, TrackerResult, TransportFailure

__all__ = [
    "AuthFailure",
    "DEFAULT_TIMEOUT_SECONDS",
    "InMemoryIssueTracker",
    "IssueTracker",
    "JiraRestTracker",
    "TrackerAnswer",
    "TrackerCall",
    "TrackerFailure",
    "TrackerResult",
    "TransportFailure",
    "UnlinkedIssueTracker",
]
