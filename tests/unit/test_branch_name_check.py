from __future__ import annotations

import pytest

from refgate.changes import AuthenticatedIdentity, IdentityKind, RefChange, RefChangeType
from refgate.checks import check_branch_name
from refgate.config import HookSettings, PolicyConfigError
from refgate.ports import NameListExemptionOracle
from refgate.violations import Violation, ViolationKind

pytestmark = pytest.mark.unit

_ORACLE = NameListExemptionOracle()
_IDENTITY = AuthenticatedIdentity(
    display_name="Jane Roe",
    email="jane@example.com",
    name="jroe",
    groups=frozenset({"developers"}),
)


def _ref(ref_id: str) -> RefChange:
    return RefChange(
        ref_id=ref_id,
        from_hash="0" * 40,
        to_hash="a" * 40,
        change_type=RefChangeType.ADD,
    )


def _check(
    ref_id: str,
    identity: AuthenticatedIdentity | None = _IDENTITY,
    **settings: object,
) -> tuple[Violation, ...]:
    return check_branch_name(
        _ref(ref_id),
        HookSettings(**settings),
        identity=identity,
        exemption_oracle=_ORACLE,
    )


def test_unset_regex_accepts_everything() -> None:
    assert _check("refs/heads/whatever") == ()


def test_matching_branch_passes() -> None:
    assert _check("refs/heads/feature/PROJ-1", branch_name_regex="feature/.+") == ()


def test_branch_name_must_fully_match() -> None:
    violations = _check("refs/heads/my-feature/x", branch_name_regex="feature/.+")

    assert len(violations) == 1
    assert violations[0].kind is ViolationKind.BRANCH_NAME
    assert violations[0].message == (
        "Invalid branch name. 'my-feature/x' does not match regex 'feature/.+'"
    )


def test_tags_are_not_branch_checked() -> None:
    assert _check("refs/tags/v1.0", branch_name_regex="feature/.+") == ()


def test_exempt_user_is_not_rejected() -> None:
    violations = _check(
        "refs/heads/hotfix",
        branch_name_regex="feature/.+",
        branch_name_exemptions=("JROE",),
    )

    assert violations == ()


def test_exempt_group_is_not_rejected() -> None:
    violations = _check(
        "refs/heads/hotfix",
        branch_name_regex="feature/.+",
        branch_name_exemptions=("developers",),
    )

    assert violations == ()


def test_unauthenticated_pusher_is_never_exempt() -> None:
    violations = _check(
        "refs/heads/hotfix",
        identity=None,
        branch_name_regex="feature/.+",
        branch_name_exemptions=("jroe",),
    )

    assert len(violations) == 1


def test_service_identity_without_matching_name_is_checked() -> None:
    service = AuthenticatedIdentity(display_name="deploy key", kind=IdentityKind.SERVICE)

    violations = _check("refs/heads/hotfix", identity=service, branch_name_regex="feature/.+")

    assert len(violations) == 1


def test_malformed_regex_is_configuration_error() -> None:
    with pytest.raises(PolicyConfigError):
        _check("refs/heads/hotfix", branch_name_regex="feature/(")
