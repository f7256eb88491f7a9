from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

BRANCH_REF_PREFIX: Final[str] = "refs/heads/"
TAG_REF_PREFIX: Final[str] = "refs/tags/"


class RefChangeType(StrEnum):
    ADD = "ADD"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class IdentityKind(StrEnum):
    NORMAL = "NORMAL"
    SERVICE = "SERVICE"
    OTHER = "OTHER"


@dataclass(frozen=True, slots=True)
class RefChange:
    ref_id: str
    from_hash: str
    to_hash: str
    change_type: RefChangeType = RefChangeType.UPDATE

    def __post_init__(self) -> None:
        if not self.ref_id:
            raise ValueError("ref_id must be non-empty")
        object.__setattr__(self, "change_type", RefChangeType(self.change_type))

    @property
    def is_tag(self) -> bool:
        return self.ref_id.startswith(TAG_REF_PREFIX)

    @property
    def short_name(self) -> str:
        for prefix in (BRANCH_REF_PREFIX, TAG_REF_PREFIX):
            if self.ref_id.startswith(prefix):
                return self.ref_id[len(prefix) :]
        return self.ref_id


@dataclass(frozen=True, slots=True)
class Changeset:
    id: str
    committer_name: str
    committer_email: str
    message: str
    parent_count: int = 1

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("changeset id must be non-empty")
        if self.parent_count < 0:
            raise ValueError(f"changeset '{self.id}' parent_count must be >= 0")

    @property
    def is_merge(self) -> bool:
        return self.parent_count > 1


@dataclass(frozen=True, slots=True)
class AuthenticatedIdentity:
    display_name: str
    email: str | None = None
    kind: IdentityKind = IdentityKind.NORMAL
    name: str | None = None
    groups: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", IdentityKind(self.kind))
        object.__setattr__(self, "groups", frozenset(self.groups))
