"""Public plan exports for gdrivereorg."""

from __future__ import annotations

from .actions import Action, EmptyParentPolicy
from .diff import diff
from .operation import CreateFolderOp, DeleteFolderOp, MoveOp, SkippedMove
from .ordering import order_deletions, topological_sort_folders
from .reorg_plan import ReorgPlan

__all__ = [
    "Action",
    "EmptyParentPolicy",
    "CreateFolderOp",
    "MoveOp",
    "DeleteFolderOp",
    "SkippedMove",
    "ReorgPlan",
    "diff",
    "order_deletions",
    "topological_sort_folders",
]
