"""Result models for plan execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional


OperationType = Literal["create", "move", "delete"]


@dataclass(slots=True)
class OperationResult:
    """
    Result for a single executed operation.

    target_id is the placeholder key for creates, the file ID for moves and
    the folder ID for deletes. result_id is the real ID of a created folder.
    """

    type: OperationType
    success: bool
    name: str
    target_id: str

    result_id: Optional[str] = None
    old_parent_id: Optional[str] = None
    new_parent_id: Optional[str] = None

    error: Optional[str] = None
    error_kind: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type,
            "success": self.success,
            "name": self.name,
            "targetId": self.target_id,
        }
        if self.result_id is not None:
            out["resultId"] = self.result_id
        if self.old_parent_id is not None:
            out["oldParentId"] = self.old_parent_id
        if self.new_parent_id is not None:
            out["newParentId"] = self.new_parent_id
        if self.error is not None:
            out["error"] = self.error
            out["errorKind"] = self.error_kind
        return out


def summarize_results(results: list[OperationResult]) -> dict[str, int]:
    summary: dict[str, int] = {"success": 0, "failed": 0}
    for r in results:
        key = "success" if r.success else "failed"
        summary[key] += 1
        type_key = f"{r.type}_{key}"
        summary[type_key] = summary.get(type_key, 0) + 1
    return summary


ApplyStatus = Literal["success", "partial", "failed"]


@dataclass(slots=True)
class ApplyResult:
    """Aggregate result of ReorganizationManager.apply()."""

    status: ApplyStatus
    results: list[OperationResult]

    id_map: dict[str, str] = field(default_factory=dict)
    summary: dict[str, int] = field(default_factory=dict)
    snapshot_refreshed: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "results": [r.to_dict() for r in self.results],
            "idMap": dict(self.id_map),
            "summary": dict(self.summary),
            "snapshotRefreshed": self.snapshot_refreshed,
        }


def status_for(results: list[OperationResult]) -> ApplyStatus:
    failed = sum(1 for r in results if not r.success)
    if failed == 0:
        return "success"
    if failed == len(results):
        return "failed"
    return "partial"
