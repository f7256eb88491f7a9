from __future__ import annotations

import logging
from typing import Final

from refgate.config import HookSettings, compile_option_pattern
from refgate.issues import IssueKey, parse_issue_keys
from refgate.tracker import (
    AuthFailure,
    IssueTracker,
    TrackerAnswer,
    TrackerFailure,
    TrackerResult,
    TransportFailure,
)
from refgate.violations import Violation, ViolationKind, violation

logger = logging.getLogger(__name__)

LINK_MISSING_MESSAGE: Final[str] = (
    "Unable to verify JIRA issue because JIRA Application Link does not exist"
)
NO_ISSUE_MESSAGE: Final[str] = "No JIRA Issue found in commit message."
AUTH_FAILURE_MESSAGE: Final[str] = (
    "Unable to validate JIRA issue because there was an authentication failure "
    "when communicating with JIRA."
)
UNEXPECTED_FAILURE_MESSAGE: Final[str] = (
    "Unable to validate JIRA issues due to an unexpected exception. "
    "Please see stack trace in logs."
)
UNEXPECTED_ISSUE_FAILURE_MESSAGE: Final[str] = (
    "Unable to validate JIRA issue due to an unexpected exception. "
    "Please see stack trace in logs."
)


def extract_issue_keys(message: str, settings: HookSettings) -> tuple[IssueKey, ...]:
    text: str | None = message
    if settings.commit_message_regex:
        # Matched without MULTILINE; only the message check anchors per line.
        pattern = compile_option_pattern("commitMessageRegex", settings.commit_message_regex)
        match = pattern.fullmatch(message)
        if match is not None and pattern.groups > 0:
            text = match.group(1)

    keys = parse_issue_keys(text)
    logger.debug("found jira issues %s from commit message: %s", [str(key) for key in keys], text)
    return keys


def check_issue_references(
    message: str,
    settings: HookSettings,
    tracker: IssueTracker,
) -> tuple[Violation, ...]:
    if not settings.require_jira_issue:
        return ()

    if not tracker.link_exists():
        return (violation(LINK_MISSING_MESSAGE),)

    keys = extract_issue_keys(message, settings)
    if settings.ignore_unknown_issue_project_keys:
        filtered = _filter_known_projects(keys, tracker)
        if not isinstance(filtered, tuple):
            return _batch_failure_violations(filtered)
        keys = filtered

    if not keys:
        return (violation(NO_ISSUE_MESSAGE),)

    violations: list[Violation] = []
    for key in keys:
        violations.extend(check_issue(key, settings, tracker))
    return tuple(violations)


def check_issue(
    key: IssueKey,
    settings: HookSettings,
    tracker: IssueTracker,
) -> tuple[Violation, ...]:
    exists = tracker.issue_exists(key)
    if not isinstance(exists, TrackerAnswer):
        return _issue_failure_violations(key, exists)
    if not exists.value:
        return (violation(f"{key}: JIRA Issue does not exist"),)

    query = settings.issue_jql_matcher
    if not query:
        return ()

    matches = tracker.matches_query(query, key)
    if not isinstance(matches, TrackerAnswer):
        return _issue_failure_violations(key, matches)
    if matches.value:
        return ()
    return (
        violation(
            f"{key}: JIRA Issue does not match JQL Query: {query}",
            ViolationKind.ISSUE_JQL,
        ),
    )


def _filter_known_projects(
    keys: tuple[IssueKey, ...],
    tracker: IssueTracker,
) -> tuple[IssueKey, ...] | TrackerFailure:
    known: list[IssueKey] = []
    for key in keys:
        result: TrackerResult = tracker.project_exists(key.project_key)
        if not isinstance(result, TrackerAnswer):
            return result
        if result.value:
            known.append(key)
        else:
            logger.debug("ignoring issue %s with unknown project key", key)
    return tuple(known)


def _batch_failure_violations(failure: TrackerFailure) -> tuple[Violation, ...]:
    if isinstance(failure, AuthFailure):
        logger.error("authentication failure while validating issues: %s", failure.detail)
        return (
            violation(AUTH_FAILURE_MESSAGE),
            violation(f"To authenticate, visit {failure.auth_url} in a web browser."),
        )
    logger.error(
        "unexpected %s while trying to validate JIRA issues: %s",
        failure.error_type,
        failure.detail,
    )
    return (violation(UNEXPECTED_FAILURE_MESSAGE),)


def _issue_failure_violations(key: IssueKey, failure: TrackerFailure) -> tuple[Violation, ...]:
    if isinstance(failure, AuthFailure):
        return (
            violation(f"{key}: {AUTH_FAILURE_MESSAGE}"),
            violation(f"To authenticate, visit {failure.auth_url} in a web browser."),
        )
    if isinstance(failure, TransportFailure):
        logger.error(
            "unexpected %s while trying to validate JIRA issue %s: %s",
            failure.error_type,
            key,
            failure.detail,
        )
    return (violation(f"{key}: {UNEXPECTED_ISSUE_FAILURE_MESSAGE}"),)
