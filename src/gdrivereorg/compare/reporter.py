"""Side-by-side report of an original and a proposed structure."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from gdrivereorg.models import FileRecord
from gdrivereorg.tree import RecordIndex, build_tree, normalize, resolve_path, tree_to_dicts
from gdrivereorg.util.ids import is_placeholder_id


@dataclass(slots=True)
class MovedFile:
    id: str
    name: str
    mime_type: str
    old_parent_id: str
    new_parent_id: str
    old_path: str
    new_path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "oldParentId": self.old_parent_id,
            "newParentId": self.new_parent_id,
            "oldPath": self.old_path,
            "newPath": self.new_path,
        }


@dataclass(slots=True)
class FolderChange:
    id: str
    name: str
    mime_type: str
    parent_id: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "parentId": self.parent_id,
            "path": self.path,
        }


@dataclass(slots=True)
class ComparisonReport:
    original_tree: list[FileRecord] = field(default_factory=list)
    proposed_tree: list[FileRecord] = field(default_factory=list)
    moved_files: list[MovedFile] = field(default_factory=list)
    new_folders: list[FolderChange] = field(default_factory=list)
    deleted_folders: list[FolderChange] = field(default_factory=list)
    summary: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalTree": tree_to_dicts(self.original_tree),
            "proposedTree": tree_to_dicts(self.proposed_tree),
            "movedFiles": [m.to_dict() for m in self.moved_files],
            "newFolders": [f.to_dict() for f in self.new_folders],
            "deletedFolders": [f.to_dict() for f in self.deleted_folders],
            "summary": dict(self.summary),
        }


def compare(
    original: Sequence[FileRecord],
    proposed: Sequence[FileRecord],
) -> ComparisonReport:
    """
    Describe what changes between two structures, with full paths.

    Only non-folder items are listed as moved. New folders are placeholder
    records absent from the original; deleted folders are original folders
    absent from the proposed folder set.
    """
    original_records = normalize(original)
    proposed_records = normalize(proposed)
    original_index = RecordIndex.from_records(original_records)
    proposed_index = RecordIndex.from_records(proposed_records)

    report = ComparisonReport(
        original_tree=build_tree(original_records),
        proposed_tree=build_tree(proposed_records),
    )

    for fid in original_index.order:
        before = original_index.get(fid)
        if before.is_folder:
            continue
        after = proposed_index.find(fid)
        if after is None or after.current_parent == before.current_parent:
            continue
        report.moved_files.append(
            MovedFile(
                id=fid,
                name=before.name,
                mime_type=before.mime_type,
                old_parent_id=before.current_parent,
                new_parent_id=after.current_parent,
                old_path=resolve_path(before, original_index, proposed_index),
                new_path=resolve_path(after, proposed_index, original_index),
            )
        )

    for fid in proposed_index.order:
        if not is_placeholder_id(fid) or original_index.has(fid):
            continue
        folder = proposed_index.get(fid)
        report.new_folders.append(
            FolderChange(
                id=fid,
                name=folder.name,
                mime_type=folder.mime_type,
                parent_id=folder.current_parent,
                path=resolve_path(folder, proposed_index, original_index),
            )
        )

    proposed_folder_ids = {r.id for r in proposed_records if r.is_folder}
    original_folders = [r for r in original_records if r.is_folder]
    for folder in original_folders:
        if folder.id in proposed_folder_ids or is_placeholder_id(folder.id):
            continue
        report.deleted_folders.append(
            FolderChange(
                id=folder.id,
                name=folder.name,
                mime_type=folder.mime_type,
                parent_id=folder.current_parent,
                path=resolve_path(folder, original_index),
            )
        )

    report.summary = {
        "totalFiles": sum(1 for r in original_records if not r.is_folder),
        "totalOptimizedFiles": sum(1 for r in proposed_records if not r.is_folder),
        "totalOriginalFolders": len(original_folders),
        "totalDeletedFolders": len(report.deleted_folders),
        "totalMovedFiles": len(report.moved_files),
        "totalNewFolders": len(report.new_folders),
    }
    return report
