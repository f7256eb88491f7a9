from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from refgate.violations import ValidationResult, Violation, ViolationKind, violation

pytestmark = pytest.mark.unit


def test_default_kind_is_unspecified() -> None:
    assert violation("something broke").kind is ViolationKind.UNSPECIFIED


def test_prepend_text_returns_new_violation() -> None:
    original = Violation(kind=ViolationKind.COMMIT_REGEX, message="bad message")

    prefixed = original.prepend_text("abc123")

    assert prefixed.message == "abc123: bad message"
    assert prefixed.kind is ViolationKind.COMMIT_REGEX
    assert original.message == "bad message"


def test_attribute_to_records_changeset_id() -> None:
    attributed = violation("bad").attribute_to("c1")

    assert attributed.changeset_id == "c1"
    assert attributed.message == "c1: bad"


def test_attribute_to_rejects_empty_id() -> None:
    with pytest.raises(ValueError):
        violation("bad").attribute_to("")


def test_violations_are_immutable() -> None:
    item = violation("bad")

    with pytest.raises(ValidationError):
        item.message = "changed"


def test_empty_message_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Violation(message="")


def test_result_accepts_only_when_empty() -> None:
    assert ValidationResult().accepted
    assert not ValidationResult(violations=(violation("bad"),)).accepted


def test_result_combine_preserves_order() -> None:
    first = ValidationResult(violations=(violation("a"), violation("b")))
    second = ValidationResult(violations=(violation("c"),))

    combined = ValidationResult.combine((first, ValidationResult(), second))

    assert combined.messages == ("a", "b", "c")


def test_result_json_payload() -> None:
    result = ValidationResult(
        violations=(
            violation("branch", ViolationKind.BRANCH_NAME),
            violation("bad").attribute_to("c1"),
        )
    )

    payload = json.loads(result.to_json())

    assert payload == {
        "status": "rejected",
        "violations": [
            {"changeset_id": None, "kind": "BRANCH_NAME", "message": "branch"},
            {"changeset_id": "c1", "kind": "UNSPECIFIED", "message": "c1: bad"},
        ],
    }
