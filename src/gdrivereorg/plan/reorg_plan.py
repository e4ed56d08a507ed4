"""ReorgPlan model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gdrivereorg.util.time import now_utc, to_rfc3339

from .operation import CreateFolderOp, DeleteFolderOp, MoveOp, SkippedMove


@dataclass(slots=True)
class ReorgPlan:
    """
    The operations that turn an original structure into a proposed one.

    Apply order is fixed: create_folders (parents first), then moves,
    then delete_folders (deepest first).
    """

    create_folders: list[CreateFolderOp] = field(default_factory=list)
    moves: list[MoveOp] = field(default_factory=list)
    delete_folders: list[DeleteFolderOp] = field(default_factory=list)
    skipped_moves: list[SkippedMove] = field(default_factory=list)
    created_at: datetime = field(default_factory=now_utc)

    @property
    def pending_keys(self) -> frozenset[str]:
        return frozenset(op.key for op in self.create_folders)

    @property
    def is_empty(self) -> bool:
        return not (self.create_folders or self.moves or self.delete_folders)

    def summary(self) -> dict[str, int]:
        return {
            "create": len(self.create_folders),
            "move": len(self.moves),
            "delete": len(self.delete_folders),
            "skipped": len(self.skipped_moves),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "createdAt": to_rfc3339(self.created_at),
            "createFolders": [op.to_dict() for op in self.create_folders],
            "moves": [op.to_dict() for op in self.moves],
            "deleteFolders": [op.to_dict() for op in self.delete_folders],
            "skippedMoves": [s.to_dict() for s in self.skipped_moves],
            "summary": self.summary(),
        }
