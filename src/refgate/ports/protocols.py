from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from refgate.changes import AuthenticatedIdentity, Changeset, RefChange


@runtime_checkable
class ChangesetSource(Protocol):
    def new_changesets(self, repository: str, ref_change: RefChange) -> Iterable[Changeset]: ...


@runtime_checkable
class IdentityProvider(Protocol):
    def current_identity(self) -> AuthenticatedIdentity | None: ...


@runtime_checkable
class ExemptionOracle(Protocol):
    def is_exempt(
        self,
        identity: AuthenticatedIdentity | None,
        ref_id: str,
        exemptions: tuple[str, ...],
    ) -> bool: ...
