"""Ordering rules for plan operations."""

from __future__ import annotations

from typing import Sequence

from gdrivereorg.errors import PlanConfigurationError
from gdrivereorg.models import FileRecord

from .operation import DeleteFolderOp


def topological_sort_folders(folders: Sequence[FileRecord]) -> list[FileRecord]:
    """
    Order new folders so every folder comes after its parent.

    Rules:
        - Only parents inside `folders` constrain the order; other parents
          already exist.
        - Otherwise the input order is kept.
        - A cycle raises PlanConfigurationError.
    """
    by_id: dict[str, FileRecord] = {}
    for folder in folders:
        by_id.setdefault(folder.id, folder)

    emitted: set[str] = set()
    ordered: list[FileRecord] = []

    for folder in by_id.values():
        chain: list[FileRecord] = []
        on_chain: set[str] = set()
        cur = folder

        while cur is not None and cur.id not in emitted:
            if cur.id in on_chain:
                raise PlanConfigurationError(
                    "Planned folders form a cycle",
                    details={"folder_ids": [f.id for f in chain]},
                )
            on_chain.add(cur.id)
            chain.append(cur)
            cur = by_id.get(cur.current_parent)

        for f in reversed(chain):
            emitted.add(f.id)
            ordered.append(f)

    return ordered


def order_deletions(block: Sequence[DeleteFolderOp]) -> list[DeleteFolderOp]:
    """Sort deep -> shallow; ties keep their original order."""
    indexed = list(enumerate(block))
    indexed.sort(key=lambda pair: (-pair[1].depth, pair[0]))
    return [op for _, op in indexed]
