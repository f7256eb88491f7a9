from .branch_name import check_branch_name
from .exclusion import is_changeset_excluded
from .identity import check_committer_email, check_committer_identity, check_committer_name
from .issues import check_issue, check_issue_references, extract_issue_keys
from .message import check_commit_message, commit_message_pattern
from .sanitize import sanitize_name

__all__ = [
    "check_branch_name",
    "check_commit_message",
    "check_committer_email",
    "check_committer_identity",
    "check_committer_name",
    "check_issue",
    "check_issue_references",
    "commit_message_pattern",
    "extract_issue_keys",
    "is_changeset_excluded",
    "sanitize_name",
]
