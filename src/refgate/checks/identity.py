from __future__ import annotations

import logging

from refgate.changes import AuthenticatedIdentity, Changeset, IdentityKind
from refgate.config import HookSettings
from refgate.violations import Violation, ViolationKind

from .sanitize import sanitize_name

logger = logging.getLogger(__name__)


def check_committer_identity(
    changeset: Changeset,
    identity: AuthenticatedIdentity,
    settings: HookSettings,
) -> tuple[Violation, ...]:
    # Service users (e.g. ssh access keys) carry the key label as name and have no email.
    if identity.kind is not IdentityKind.NORMAL:
        return ()
    return check_committer_email(changeset, identity, settings) + check_committer_name(
        changeset, identity, settings
    )


def check_committer_email(
    changeset: Changeset,
    identity: AuthenticatedIdentity,
    settings: HookSettings,
) -> tuple[Violation, ...]:
    if not settings.require_matching_author_email:
        return ()
    if identity.email is None:
        logger.warning("pushing user has null email address - skipping email validation")
        return ()

    logger.debug(
        "requireMatchingAuthorEmail authorEmail=%s userEmail=%s",
        changeset.committer_email,
        identity.email,
    )
    if changeset.committer_email.lower() == identity.email.lower():
        return ()
    return (
        Violation(
            kind=ViolationKind.COMMITTER_EMAIL,
            message=(
                f"expected committer email '{identity.email}' "
                f"but found '{changeset.committer_email}'"
            ),
        ),
    )


def check_committer_name(
    changeset: Changeset,
    identity: AuthenticatedIdentity,
    settings: HookSettings,
) -> tuple[Violation, ...]:
    if not settings.require_matching_author_name:
        return ()

    expected = sanitize_name(identity.display_name) or ""
    logger.debug(
        "requireMatchingAuthorName authorName=%s userName=%s",
        changeset.committer_name,
        expected,
    )
    if changeset.committer_name.lower() == expected.lower():
        return ()
    return (
        Violation(
            kind=ViolationKind.COMMITTER_NAME,
            message=(
                f"expected committer name '{expected}' but found '{changeset.committer_name}'"
            ),
        ),
    )
