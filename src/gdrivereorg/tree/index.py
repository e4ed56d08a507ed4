"""Derived parent/children index over a flat record list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from gdrivereorg.models import FileRecord
from gdrivereorg.util.ids import ROOT_ID


@dataclass(slots=True)
class RecordIndex:
    """
    Lookup structure rebuilt from parents[0] links.

    Indexes:
        - files_by_id
        - children_by_parent_id (insertion order preserved)

    The index never owns the parent relation; rebuild it after any change.
    """

    files_by_id: dict[str, FileRecord] = field(default_factory=dict)
    children_by_parent_id: dict[str, list[str]] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: Iterable[FileRecord]) -> RecordIndex:
        """
        Build an index from flat records.

        Notes:
            - When an ID repeats, the first record wins.
        """
        index = cls()
        for record in records:
            if record.id in index.files_by_id:
                continue
            index.files_by_id[record.id] = record
            index.order.append(record.id)
            index.children_by_parent_id.setdefault(record.current_parent, []).append(
                record.id
            )
        return index

    # ----------------------------
    # Query helpers
    # ----------------------------
    def has(self, file_id: str) -> bool:
        return file_id in self.files_by_id

    def get(self, file_id: str) -> FileRecord:
        return self.files_by_id[file_id]

    def find(self, file_id: Optional[str]) -> Optional[FileRecord]:
        if not file_id:
            return None
        return self.files_by_id.get(file_id)

    def list_children_ids(self, parent_id: str) -> list[str]:
        return list(self.children_by_parent_id.get(parent_id, []))

    def depth_of(self, file_id: str) -> int:
        """
        Number of parent hops from the record up to root.

        A parent missing from the index counts as one hop and ends the walk;
        a cycle ends the walk at the first revisited node.
        """
        depth = 0
        visited: set[str] = {file_id}
        record = self.find(file_id)
        current = record.current_parent if record else None

        while current and current != ROOT_ID:
            depth += 1
            if current in visited:
                break
            visited.add(current)
            parent = self.find(current)
            if parent is None:
                break
            current = parent.current_parent

        return depth

    def root_ids(self) -> list[str]:
        """IDs whose parent is root or not present in this index."""
        return [
            file_id
            for file_id in self.order
            if not self._has_known_parent(self.files_by_id[file_id])
        ]

    def _has_known_parent(self, record: FileRecord) -> bool:
        parent = record.current_parent
        return bool(parent) and parent != ROOT_ID and parent != record.id and (
            parent in self.files_by_id
        )


def resolve_path_parts(
    record: FileRecord,
    primary: RecordIndex,
    fallback: Optional[RecordIndex] = None,
) -> list[str]:
    """
    Names from the topmost known ancestor down to record.

    Each parent is looked up in primary first, then in fallback (for folders
    that only exist in the other collection). An unknown parent or a cycle
    ends the walk.
    """
    parts: list[str] = []
    visited: set[str] = set()
    current: Optional[FileRecord] = record

    while current is not None and current.id not in visited:
        visited.add(current.id)
        parts.append(current.name)

        parent_id = current.current_parent
        if not parent_id or parent_id == ROOT_ID:
            break

        current = primary.find(parent_id)
        if current is None and fallback is not None:
            current = fallback.find(parent_id)

    parts.reverse()
    return parts


def resolve_path(
    record: FileRecord,
    primary: RecordIndex,
    fallback: Optional[RecordIndex] = None,
) -> str:
    return "/".join(resolve_path_parts(record, primary, fallback))


def build_tree(records: Iterable[FileRecord]) -> list[FileRecord]:
    """
    Materialize a tree view: clones with children filled from parents[0].

    Records whose parent is root, unknown, or part of a cycle unreachable from
    a root are returned at the top level. Every level is sorted folders first,
    then by name.
    """
    index = RecordIndex.from_records(records)
    nodes: dict[str, FileRecord] = {
        file_id: index.get(file_id).clone() for file_id in index.order
    }

    placed: set[str] = set()
    roots: list[FileRecord] = []

    def attach_subtree(top_id: str) -> None:
        stack = [top_id]
        placed.add(top_id)
        while stack:
            cur = stack.pop()
            for child_id in index.children_by_parent_id.get(cur, []):
                if child_id in placed:
                    continue
                placed.add(child_id)
                nodes[cur].children.append(nodes[child_id])
                stack.append(child_id)

    for root_id in index.root_ids():
        roots.append(nodes[root_id])
        attach_subtree(root_id)

    # Cycles have no root; surface them at the top level.
    for file_id in index.order:
        if file_id not in placed:
            roots.append(nodes[file_id])
            attach_subtree(file_id)

    _sort_levels(roots)
    return roots


def _sort_key(record: FileRecord) -> tuple[int, str, str]:
    return (0 if record.is_folder else 1, record.name.lower(), record.id)


def _sort_levels(roots: list[FileRecord]) -> None:
    roots.sort(key=_sort_key)
    stack = list(roots)
    while stack:
        node = stack.pop()
        if node.children:
            node.children.sort(key=_sort_key)
            stack.extend(node.children)


def tree_to_dicts(roots: Iterable[FileRecord]) -> list[dict[str, Any]]:
    """Serialize a build_tree() result, nesting each node's `children`."""
    out: list[dict[str, Any]] = []
    stack: list[tuple[FileRecord, list[dict[str, Any]]]] = [
        (node, out) for node in reversed(list(roots))
    ]
    while stack:
        node, sink = stack.pop()
        data = node.to_dict()
        data["children"] = []
        sink.append(data)
        stack.extend((child, data["children"]) for child in reversed(node.children))
    return out
