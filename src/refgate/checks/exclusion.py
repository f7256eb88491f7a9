from __future__ import annotations

import logging

from refgate.changes import AuthenticatedIdentity, Changeset, IdentityKind
from refgate.config import HookSettings, compile_option_pattern

logger = logging.getLogger(__name__)


def is_changeset_excluded(
    changeset: Changeset,
    identity: AuthenticatedIdentity | None,
    settings: HookSettings,
) -> bool:
    if settings.exclude_merge_commits and changeset.is_merge:
        logger.debug("skipping commit %s because it is a merge commit", changeset.id)
        return True

    if (
        settings.exclude_service_user_commits
        and identity is not None
        and identity.kind is IdentityKind.SERVICE
    ):
        logger.debug("skipping commit %s because it was pushed by a service user", changeset.id)
        return True

    if settings.exclude_by_regex:
        pattern = compile_option_pattern("excludeByRegex", settings.exclude_by_regex)
        if pattern.search(changeset.message):
            logger.debug("skipping commit %s because it matches excludeByRegex", changeset.id)
            return True

    return False
