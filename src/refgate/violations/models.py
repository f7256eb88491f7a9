from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ViolationKind(StrEnum):
    BRANCH_NAME = "BRANCH_NAME"
    COMMITTER_EMAIL = "COMMITTER_EMAIL"
    COMMITTER_NAME = "COMMITTER_NAME"
    COMMIT_REGEX = "COMMIT_REGEX"
    ISSUE_JQL = "ISSUE_JQL"
    UNSPECIFIED = "UNSPECIFIED"


class Violation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: ViolationKind = ViolationKind.UNSPECIFIED
    message: str = Field(min_length=1)
    changeset_id: str | None = None

    def prepend_text(self, text: str) -> Violation:
        return self.model_copy(update={"message": f"{text}: {self.message}"})

    def attribute_to(self, changeset_id: str) -> Violation:
        if not changeset_id:
            raise ValueError("changeset_id must be non-empty")
        attributed = self.prepend_text(changeset_id)
        return attributed.model_copy(update={"changeset_id": changeset_id})


def violation(message: str, kind: ViolationKind = ViolationKind.UNSPECIFIED) -> Violation:
    return Violation(kind=kind, message=message)
