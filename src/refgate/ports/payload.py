from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from refgate.changes import AuthenticatedIdentity, Changeset, IdentityKind, RefChange, RefChangeType

from .static import StaticChangesetSource, StaticIdentityProvider


class PushDescriptionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class PushDescription:
    repository: str
    identity: AuthenticatedIdentity | None
    ref_changes: tuple[RefChange, ...]
    changesets_by_ref: Mapping[str, tuple[Changeset, ...]]

    def changeset_source(self) -> StaticChangesetSource:
        return StaticChangesetSource(self.changesets_by_ref)

    def identity_provider(self) -> StaticIdentityProvider:
        return StaticIdentityProvider(self.identity)


def load_push_description(path: Path | str) -> PushDescription:
    push_path = Path(path)
    try:
        payload = yaml.safe_load(push_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PushDescriptionError(f"push description is missing: {push_path.as_posix()}") from exc
    except yaml.YAMLError as exc:
        raise PushDescriptionError(
            f"invalid JSON/YAML payload: {push_path.as_posix()}: {exc}"
        ) from exc
    return parse_push_description(payload)


def parse_push_description(payload: object) -> PushDescription:
    if not isinstance(payload, dict):
        raise PushDescriptionError("push description must be a mapping")

    raw_ref_changes = payload.get("ref_changes")
    if not isinstance(raw_ref_changes, list) or not raw_ref_changes:
        raise PushDescriptionError("ref_changes must be a non-empty list")

    ref_changes: list[RefChange] = []
    changesets_by_ref: dict[str, tuple[Changeset, ...]] = {}
    for index, raw in enumerate(raw_ref_changes):
        mapping = _require_mapping(raw, field_name=f"ref_changes[{index}]")
        try:
            ref_change = RefChange(
                ref_id=str(mapping.get("ref_id") or ""),
                from_hash=str(mapping.get("from_hash") or ""),
                to_hash=str(mapping.get("to_hash") or ""),
                change_type=RefChangeType(str(mapping.get("type", RefChangeType.UPDATE)).upper()),
            )
            changesets = tuple(
                _parse_changeset(item, field_name=f"ref_changes[{index}].changesets")
                for item in mapping.get("changesets") or ()
            )
        except (TypeError, ValueError) as exc:
            raise PushDescriptionError(f"ref_changes[{index}]: {exc}") from exc
        ids = [changeset.id for changeset in changesets]
        if len(set(ids)) != len(ids):
            raise PushDescriptionError(f"ref_changes[{index}]: duplicate changeset ids")
        if ref_change.ref_id in changesets_by_ref:
            raise PushDescriptionError(
                f"ref_changes[{index}]: ref {ref_change.ref_id} is listed more than once"
            )
        ref_changes.append(ref_change)
        changesets_by_ref[ref_change.ref_id] = changesets

    return PushDescription(
        repository=str(payload.get("repository") or ""),
        identity=_parse_identity(payload.get("identity")),
        ref_changes=tuple(ref_changes),
        changesets_by_ref=changesets_by_ref,
    )


def _parse_changeset(raw: object, *, field_name: str) -> Changeset:
    mapping = _require_mapping(raw, field_name=field_name)
    return Changeset(
        id=str(mapping.get("id") or ""),
        committer_name=str(mapping.get("committer_name") or ""),
        committer_email=str(mapping.get("committer_email") or ""),
        message=str(mapping.get("message") or ""),
        parent_count=int(mapping.get("parent_count", 1)),
    )


def _parse_identity(raw: object) -> AuthenticatedIdentity | None:
    if raw is None:
        return None
    mapping = _require_mapping(raw, field_name="identity")
    email = mapping.get("email")
    name = mapping.get("name")
    try:
        return AuthenticatedIdentity(
            display_name=str(mapping.get("display_name") or ""),
            email=None if email is None else str(email),
            kind=IdentityKind(str(mapping.get("kind", IdentityKind.NORMAL)).upper()),
            name=None if name is None else str(name),
            groups=frozenset(str(group) for group in mapping.get("groups") or ()),
        )
    except ValueError as exc:
        raise PushDescriptionError(f"identity: {exc}") from exc


def _require_mapping(value: object, *, field_name: str) -> dict[str, object]:
    if not isinstance(value, dict):
        raise PushDescriptionError(f"{field_name} must be a mapping")
    return value
