"""Placeholder -> real ID map filled during the create phase."""

from __future__ import annotations

from typing import Iterator

from gdrivereorg.errors import UnresolvedPlaceholderError
from gdrivereorg.util.ids import Committed, FolderRef, Pending


class IdMap:
    """Maps planned folder keys to the IDs the provider assigned."""

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def record(self, key: str, real_id: str) -> None:
        if not real_id:
            raise UnresolvedPlaceholderError(
                "Provider did not return an ID for created folder",
                details={"key": key},
            )
        self._ids[key] = real_id

    def resolve(self, ref: FolderRef) -> str:
        """Return the real ID for ref; a Pending key must have been recorded."""
        if isinstance(ref, Committed):
            return ref.id
        if isinstance(ref, Pending) and ref.key in self._ids:
            return self._ids[ref.key]
        raise UnresolvedPlaceholderError(
            "Parent folder was not created",
            details={"key": getattr(ref, "key", None)},
        )

    def as_dict(self) -> dict[str, str]:
        return dict(self._ids)
