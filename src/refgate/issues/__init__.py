from .keys import IssueKey, parse_issue_keys

__all__ = [
    "IssueKey",
    "parse_issue_keys",
]
