"""Compute a ReorgPlan from an original and a proposed structure."""

from __future__ import annotations

import logging
from typing import Sequence

from gdrivereorg.errors import PlanConfigurationError
from gdrivereorg.models import FileRecord
from gdrivereorg.tree import RecordIndex, normalize
from gdrivereorg.util.ids import ROOT_ID, is_placeholder_id, ref_for

from .actions import EmptyParentPolicy
from .operation import CreateFolderOp, DeleteFolderOp, MoveOp, SkippedMove
from .ordering import order_deletions, topological_sort_folders
from .reorg_plan import ReorgPlan

logger = logging.getLogger(__name__)


def diff(
    original: Sequence[FileRecord],
    proposed: Sequence[FileRecord],
    *,
    empty_parent_policy: EmptyParentPolicy = EmptyParentPolicy.SKIP,
) -> ReorgPlan:
    """
    Build the plan that transforms `original` into `proposed`.

    Both inputs are normalized first. Placeholder IDs are resolved into
    Pending references here and nowhere later. A planned folder without a
    parent is created under root. Moves into a folder the plan deletes are
    treated like moves to an unknown parent.

    Raises:
        PlanConfigurationError: when planned folders form a cycle, a planned
            folder names an unknown placeholder parent or a dropped folder,
            or a move target is invalid under EmptyParentPolicy.RAISE.
    """
    original_records = normalize(original)
    proposed_records = normalize(proposed)

    original_index = RecordIndex.from_records(original_records)
    proposed_index = RecordIndex.from_records(proposed_records)
    original_ids = set(original_index.files_by_id)

    proposed_folder_ids = {r.id for r in proposed_records if r.is_folder}
    dropped_folders = [
        rec
        for rec in (original_index.get(fid) for fid in original_index.order)
        if rec.is_folder
        and rec.id not in proposed_folder_ids
        and not is_placeholder_id(rec.id)
    ]
    deleted_ids = frozenset(rec.id for rec in dropped_folders)

    new_folders = [
        proposed_index.get(fid)
        for fid in proposed_index.order
        if is_placeholder_id(fid) and fid not in original_ids
    ]
    pending_keys = frozenset(f.id for f in new_folders)

    for folder in new_folders:
        parent_id = folder.current_parent or ROOT_ID
        if parent_id in deleted_ids:
            raise PlanConfigurationError(
                f"Planned folder '{folder.name}' is placed under a folder scheduled for deletion",
                details={"folder_id": folder.id, "parent_id": parent_id},
            )
        if (
            is_placeholder_id(parent_id)
            and parent_id not in pending_keys
            and parent_id not in original_ids
        ):
            raise PlanConfigurationError(
                f"Planned folder '{folder.name}' has an unknown parent",
                details={"folder_id": folder.id, "parent_id": parent_id},
            )

    plan = ReorgPlan()
    for folder in topological_sort_folders(new_folders):
        plan.create_folders.append(
            CreateFolderOp(
                key=folder.id,
                name=folder.name,
                parent=ref_for(folder.current_parent or ROOT_ID, pending_keys),
            )
        )

    for fid in proposed_index.order:
        if fid in pending_keys or is_placeholder_id(fid):
            continue
        before = original_index.find(fid)
        if before is None:
            continue

        after = proposed_index.get(fid)
        old_parent = before.current_parent or ROOT_ID
        new_parent = after.current_parent
        if new_parent == before.current_parent:
            continue

        reason = _invalid_target_reason(new_parent, pending_keys, original_ids, deleted_ids)
        if reason is not None:
            if empty_parent_policy is EmptyParentPolicy.RAISE:
                raise PlanConfigurationError(
                    f"Cannot move '{after.name}': {reason}",
                    details={"file_id": fid, "new_parent_id": new_parent},
                )
            logger.warning("Skipping move of %s (%s): %s", after.name, fid, reason)
            plan.skipped_moves.append(
                SkippedMove(
                    file_id=fid,
                    file_name=after.name,
                    old_parent_id=old_parent,
                    reason=reason,
                )
            )
            continue

        plan.moves.append(
            MoveOp(
                file_id=fid,
                file_name=after.name,
                old_parent_id=old_parent,
                new_parent=ref_for(new_parent, pending_keys),
            )
        )

    plan.delete_folders = order_deletions(
        [
            DeleteFolderOp(
                folder_id=rec.id,
                name=rec.name,
                depth=original_index.depth_of(rec.id),
            )
            for rec in dropped_folders
        ]
    )

    _warn_on_orphaned_contents(proposed_index, plan)

    logger.info(
        "Plan built: %d creates, %d moves, %d deletes, %d skipped",
        len(plan.create_folders),
        len(plan.moves),
        len(plan.delete_folders),
        len(plan.skipped_moves),
    )
    return plan


def _invalid_target_reason(
    new_parent: str,
    pending_keys: frozenset[str],
    original_ids: set[str],
    deleted_ids: frozenset[str],
) -> str | None:
    if not new_parent:
        return "empty parent"
    if new_parent in deleted_ids:
        return f"parent {new_parent} is scheduled for deletion"
    if (
        is_placeholder_id(new_parent)
        and new_parent not in pending_keys
        and new_parent not in original_ids
    ):
        return f"unknown placeholder parent {new_parent}"
    return None


def _warn_on_orphaned_contents(proposed_index: RecordIndex, plan: ReorgPlan) -> None:
    deleted = {op.folder_id for op in plan.delete_folders}
    if not deleted:
        return
    skipped = {s.file_id for s in plan.skipped_moves}
    for fid in proposed_index.order:
        record = proposed_index.get(fid)
        if fid not in skipped and record.current_parent in deleted:
            logger.warning(
                "%s (%s) stays under folder %s, which is scheduled for deletion",
                record.name,
                fid,
                record.current_parent,
            )
