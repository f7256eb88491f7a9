from __future__ import annotations

import logging

from refgate.changes import AuthenticatedIdentity, RefChange
from refgate.config import HookSettings, compile_option_pattern
from refgate.ports import ExemptionOracle
from refgate.violations import Violation, ViolationKind

logger = logging.getLogger(__name__)


def check_branch_name(
    ref_change: RefChange,
    settings: HookSettings,
    *,
    identity: AuthenticatedIdentity | None,
    exemption_oracle: ExemptionOracle,
) -> tuple[Violation, ...]:
    regex = settings.branch_name_regex
    if ref_change.is_tag or not regex:
        return ()

    pattern = compile_option_pattern("branchNameRegex", regex)
    branch_name = ref_change.short_name
    if pattern.fullmatch(branch_name):
        return ()

    if exemption_oracle.is_exempt(identity, ref_change.ref_id, settings.branch_name_exemptions):
        logger.debug("branch name check skipped for exempt pusher ref=%s", ref_change.ref_id)
        return ()

    return (
        Violation(
            kind=ViolationKind.BRANCH_NAME,
            message=f"Invalid branch name. '{branch_name}' does not match regex '{regex}'",
        ),
    )
