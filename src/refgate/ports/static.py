from __future__ import annotations

from collections.abc import Iterable, Mapping

from refgate.changes import AuthenticatedIdentity, Changeset, RefChange


class StaticChangesetSource:
    def __init__(self, changesets_by_ref: Mapping[str, Iterable[Changeset]] | None = None) -> None:
        self._changesets_by_ref = {
            ref_id: tuple(changesets) for ref_id, changesets in (changesets_by_ref or {}).items()
        }

    def new_changesets(self, repository: str, ref_change: RefChange) -> tuple[Changeset, ...]:
        del repository
        return self._changesets_by_ref.get(ref_change.ref_id, ())


class StaticIdentityProvider:
    def __init__(self, identity: AuthenticatedIdentity | None) -> None:
        self._identity = identity

    def current_identity(self) -> AuthenticatedIdentity | None:
        return self._identity


class NameListExemptionOracle:
    def is_exempt(
        self,
        identity: AuthenticatedIdentity | None,
        ref_id: str,
        exemptions: tuple[str, ...],
    ) -> bool:
        del ref_id
        if identity is None or not exemptions:
            return False
        names = {item.lower() for item in exemptions}
        if identity.name is not None and identity.name.lower() in names:
            return True
        return any(group.lower() in names for group in identity.groups)
