"""Plan operation models (explicit fields per action)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from gdrivereorg.util.ids import FolderRef, Pending, ref_to_str

from .actions import Action


@dataclass(slots=True)
class CreateFolderOp:
    """Create a planned folder; key is its placeholder ID."""

    key: str
    name: str
    parent: FolderRef

    action: Action = Action.CREATE_FOLDER

    def validate_required_fields(self) -> None:
        _require(self.key, "key")
        _require(self.name, "name")
        _require(ref_to_str(self.parent), "parent")

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "tempId": self.key,
            "name": self.name,
            "parentId": ref_to_str(self.parent),
            "parentIsPending": isinstance(self.parent, Pending),
        }


@dataclass(slots=True)
class MoveOp:
    """Move one item from old_parent_id to new_parent."""

    file_id: str
    file_name: str
    old_parent_id: str
    new_parent: FolderRef

    action: Action = Action.MOVE

    @property
    def new_parent_id(self) -> str:
        return ref_to_str(self.new_parent)

    def validate_required_fields(self) -> None:
        _require(self.file_id, "file_id")
        _require(self.new_parent_id, "new_parent")

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "fileId": self.file_id,
            "fileName": self.file_name,
            "oldParentId": self.old_parent_id,
            "newParentId": self.new_parent_id,
        }


@dataclass(slots=True)
class DeleteFolderOp:
    """Delete an original folder that has no counterpart in the proposal."""

    folder_id: str
    name: str
    depth: int

    action: Action = Action.DELETE_FOLDER

    def validate_required_fields(self) -> None:
        _require(self.folder_id, "folder_id")

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "id": self.folder_id,
            "name": self.name,
            "depth": self.depth,
        }


@dataclass(slots=True)
class SkippedMove:
    """A move the diff refused to emit, kept for reporting."""

    file_id: str
    file_name: str
    old_parent_id: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileId": self.file_id,
            "fileName": self.file_name,
            "oldParentId": self.old_parent_id,
            "reason": self.reason,
        }


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {field_name}")
