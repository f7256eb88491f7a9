from __future__ import annotations

import logging
from collections.abc import Iterable

from refgate.changes import AuthenticatedIdentity, Changeset, RefChange
from refgate.checks import (
    check_branch_name,
    check_commit_message,
    check_committer_identity,
    check_issue_references,
    is_changeset_excluded,
)
from refgate.config import HookSettings
from refgate.ports import ChangesetSource, ExemptionOracle, IdentityProvider
from refgate.tracker import IssueTracker
from refgate.violations import ValidationResult, Violation

from .ordering import ordered_changesets

logger = logging.getLogger(__name__)


class PushValidator:
    """Decides whether a ref update is accepted.

    The validator holds only its collaborators; settings, identity and changesets are
    per-call arguments, so one instance can serve concurrent pushes. Malformed
    configuration patterns raise ``PolicyConfigError`` and abort the whole evaluation.
    """

    def __init__(
        self,
        *,
        changeset_source: ChangesetSource,
        identity_provider: IdentityProvider,
        exemption_oracle: ExemptionOracle,
        issue_tracker: IssueTracker,
    ) -> None:
        self._changeset_source = changeset_source
        self._identity_provider = identity_provider
        self._exemption_oracle = exemption_oracle
        self._issue_tracker = issue_tracker

    def check_ref_changes(
        self,
        repository: str,
        settings: HookSettings,
        ref_changes: Iterable[RefChange],
    ) -> ValidationResult:
        return ValidationResult.combine(
            self.check_ref_change(repository, settings, ref_change) for ref_change in ref_changes
        )

    def check_ref_change(
        self,
        repository: str,
        settings: HookSettings,
        ref_change: RefChange,
    ) -> ValidationResult:
        logger.debug(
            "checking ref change refId=%s fromHash=%s toHash=%s type=%s",
            ref_change.ref_id,
            ref_change.from_hash,
            ref_change.to_hash,
            ref_change.change_type,
            extra={"repository": repository, "ref_id": ref_change.ref_id},
        )
        identity = self._identity_provider.current_identity()

        violations: list[Violation] = list(
            check_branch_name(
                ref_change,
                settings,
                identity=identity,
                exemption_oracle=self._exemption_oracle,
            )
        )

        changesets = ordered_changesets(
            self._changeset_source.new_changesets(repository, ref_change)
        )
        for changeset in changesets:
            for item in self.check_changeset(
                settings,
                changeset,
                identity=identity,
                check_messages=not ref_change.is_tag,
            ):
                violations.append(item.attribute_to(changeset.id))

        return ValidationResult(violations=tuple(violations))

    def check_changeset(
        self,
        settings: HookSettings,
        changeset: Changeset,
        *,
        identity: AuthenticatedIdentity | None,
        check_messages: bool = True,
    ) -> tuple[Violation, ...]:
        logger.debug(
            "checking commit id=%s name=%s email=%s message=%s",
            changeset.id,
            changeset.committer_name,
            changeset.committer_email,
            changeset.message,
            extra={"changeset_id": changeset.id},
        )
        violations: list[Violation] = []

        if identity is None:
            logger.warning("unauthenticated user is pushing - skipping committer checks")
        else:
            violations.extend(check_committer_identity(changeset, identity, settings))

        if check_messages and not is_changeset_excluded(changeset, identity, settings):
            message_violations = check_commit_message(changeset.message, settings)
            violations.extend(message_violations)

            # Issue extraction may depend on the message regex capture group.
            if not message_violations:
                violations.extend(
                    check_issue_references(changeset.message, settings, self._issue_tracker)
                )

        return tuple(violations)
