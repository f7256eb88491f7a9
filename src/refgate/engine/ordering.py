from __future__ import annotations

from collections.abc import Iterable

from refgate.changes import Changeset


def ordered_changesets(changesets: Iterable[Changeset]) -> tuple[Changeset, ...]:
    # Unordered collections are sorted by id; sequences keep the order the host supplied.
    if isinstance(changesets, set | frozenset):
        ordered = tuple(sorted(changesets, key=lambda changeset: changeset.id))
    else:
        ordered = tuple(changesets)
    seen: set[str] = set()
    for changeset in ordered:
        if changeset.id in seen:
            raise ValueError(f"duplicate changeset id in push: {changeset.id}")
        seen.add(changeset.id)
    return ordered
