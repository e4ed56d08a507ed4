from __future__ import annotations

from dataclasses import dataclass
from typing import Union

ROOT_ID: str = "root"
PLACEHOLDER_PREFIX: str = "temp_"


@dataclass(slots=True, frozen=True)
class Pending:
    """Reference to a folder that is planned but not created yet."""

    key: str


@dataclass(slots=True, frozen=True)
class Committed:
    """Reference to an item that exists on the provider (or the root)."""

    id: str


FolderRef = Union[Pending, Committed]


def is_placeholder_id(value: str | None) -> bool:
    """Return True if value uses the wire prefix for not-yet-created folders."""
    return isinstance(value, str) and value.startswith(PLACEHOLDER_PREFIX)


def placeholder_id(slug: str) -> str:
    """Build a placeholder ID for a planned folder."""
    if not slug:
        raise ValueError("slug must be a non-empty string")
    return f"{PLACEHOLDER_PREFIX}{slug}"


def is_root(value: str | None) -> bool:
    return value == ROOT_ID


def ref_for(parent_id: str, pending_keys: set[str] | frozenset[str]) -> FolderRef:
    """Tag a raw parent ID as Pending when it names a planned folder."""
    if parent_id in pending_keys:
        return Pending(parent_id)
    return Committed(parent_id)


def ref_to_str(ref: FolderRef) -> str:
    if isinstance(ref, Pending):
        return ref.key
    return ref.id
