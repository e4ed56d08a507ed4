"""Run a ReorgPlan against a storage provider."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from gdrivereorg.errors import GDriveReorgError, OperationError, PlanConfigurationError
from gdrivereorg.models import FileRecord, OperationResult
from gdrivereorg.plan import (
    CreateFolderOp,
    DeleteFolderOp,
    EmptyParentPolicy,
    MoveOp,
    ReorgPlan,
    diff,
)
from gdrivereorg.provider import StorageProvider

from .events import ProgressEmitter, ProgressEvent, ProgressObserver
from .id_map import IdMap

logger = logging.getLogger(__name__)


class PlanExecutor:
    """
    Applies plans: creates sequentially, moves concurrently, deletes sequentially.

    A failing operation becomes a failed OperationResult; the rest of the
    plan still runs. The executor performs no retries.
    """

    def __init__(
        self,
        provider: StorageProvider,
        emitter: Optional[ProgressEmitter] = None,
        *,
        empty_parent_policy: EmptyParentPolicy = EmptyParentPolicy.SKIP,
    ) -> None:
        self._provider = provider
        self._emitter = emitter or ProgressEmitter()
        self._empty_parent_policy = empty_parent_policy
        self._last_id_map: dict[str, str] = {}

    @property
    def emitter(self) -> ProgressEmitter:
        return self._emitter

    @property
    def last_id_map(self) -> dict[str, str]:
        """Placeholder -> real ID pairs from the most recent run."""
        return dict(self._last_id_map)

    async def apply(
        self,
        original: Sequence[FileRecord],
        proposed: Sequence[FileRecord],
        on_progress: Optional[ProgressObserver] = None,
    ) -> list[OperationResult]:
        """Diff the two structures and execute the resulting plan."""
        plan = diff(original, proposed, empty_parent_policy=self._empty_parent_policy)
        return await self.execute(plan, on_progress=on_progress)

    async def execute(
        self,
        plan: ReorgPlan,
        on_progress: Optional[ProgressObserver] = None,
    ) -> list[OperationResult]:
        _validate_plan(plan)

        if on_progress is not None:
            self._emitter.subscribe(on_progress)
        try:
            return await self._run(plan)
        finally:
            if on_progress is not None:
                self._emitter.unsubscribe(on_progress)

    # ----------------------------
    # Internals
    # ----------------------------
    async def _run(self, plan: ReorgPlan) -> list[OperationResult]:
        id_map = IdMap()
        results: list[OperationResult] = []

        for create_op in plan.create_folders:
            results.append(await self._create(create_op, id_map))

        if plan.moves:
            self._emitter.emit(f"Moving {len(plan.moves)} files concurrently...")
            move_results = await asyncio.gather(
                *(self._move(move_op, id_map) for move_op in plan.moves)
            )
            results.extend(move_results)
            succeeded = sum(1 for r in move_results if r.success)
            self._emitter.emit(
                f"Moved {len(move_results)} files: "
                f"{succeeded} succeeded, {len(move_results) - succeeded} failed"
            )

        if plan.delete_folders:
            self._emitter.emit(f"Deleting {len(plan.delete_folders)} old folders...")
            for delete_op in plan.delete_folders:
                results.append(await self._delete(delete_op))

        self._last_id_map = id_map.as_dict()
        return results

    async def _create(self, op: CreateFolderOp, id_map: IdMap) -> OperationResult:
        self._emitter.emit(f"Creating folder: {op.name}")
        try:
            parent_id = id_map.resolve(op.parent)
            created = await self._provider.create_folder(op.name, parent_id)
            id_map.record(op.key, created.id)
        except Exception as exc:
            error = _as_reorg_error("create", exc)
            self._emitter.emit(
                f"Folder creation failed: {op.name}",
                ProgressEvent("folder-create", False, op.name, error=str(error)),
            )
            return _failed("create", op.name, op.key, error)

        self._emitter.emit(
            f"Folder created: {op.name}",
            ProgressEvent("folder-create", True, op.name, id=created.id),
        )
        return OperationResult(
            type="create",
            success=True,
            name=op.name,
            target_id=op.key,
            result_id=created.id,
            new_parent_id=parent_id,
        )

    async def _move(self, op: MoveOp, id_map: IdMap) -> OperationResult:
        new_parent_id: Optional[str] = None
        try:
            new_parent_id = id_map.resolve(op.new_parent)
            await self._provider.update_parents(
                op.file_id,
                add_parent_id=new_parent_id,
                remove_parent_id=op.old_parent_id,
            )
        except Exception as exc:
            error = _as_reorg_error("move", exc)
            self._emitter.emit(
                f"File move failed: {op.file_name}",
                ProgressEvent(
                    "file-move", False, op.file_name, file_id=op.file_id, error=str(error)
                ),
            )
            result = _failed("move", op.file_name, op.file_id, error)
            result.old_parent_id = op.old_parent_id
            result.new_parent_id = new_parent_id
            return result

        self._emitter.emit(
            f"File moved: {op.file_name}",
            ProgressEvent("file-move", True, op.file_name, file_id=op.file_id),
        )
        return OperationResult(
            type="move",
            success=True,
            name=op.file_name,
            target_id=op.file_id,
            old_parent_id=op.old_parent_id,
            new_parent_id=new_parent_id,
        )

    async def _delete(self, op: DeleteFolderOp) -> OperationResult:
        try:
            await self._provider.delete_file(op.folder_id)
        except Exception as exc:
            error = _as_reorg_error("delete", exc)
            self._emitter.emit(
                f"Folder deletion failed: {op.name}",
                ProgressEvent("folder-delete", False, op.name, id=op.folder_id, error=str(error)),
            )
            return _failed("delete", op.name, op.folder_id, error)

        self._emitter.emit(
            f"Folder deleted: {op.name}",
            ProgressEvent("folder-delete", True, op.name, id=op.folder_id),
        )
        return OperationResult(type="delete", success=True, name=op.name, target_id=op.folder_id)


def _validate_plan(plan: ReorgPlan) -> None:
    ops: list[CreateFolderOp | MoveOp | DeleteFolderOp] = [
        *plan.create_folders,
        *plan.moves,
        *plan.delete_folders,
    ]
    for op in ops:
        try:
            op.validate_required_fields()
        except ValueError as exc:
            raise PlanConfigurationError(
                "Invalid operation: missing required fields",
                details={"action": op.action.value},
                cause=exc,
            ) from exc


def _as_reorg_error(kind: str, exc: Exception) -> GDriveReorgError:
    if isinstance(exc, GDriveReorgError):
        return exc
    logger.warning("Unexpected %s error: %s", type(exc).__name__, exc, exc_info=exc)
    return OperationError(f"Unexpected error during {kind}: {exc}", cause=exc)


def _failed(kind: str, name: str, target_id: str, exc: GDriveReorgError) -> OperationResult:
    logger.debug("%s of %s failed: %s", kind, target_id, exc)
    return OperationResult(
        type=kind,  # type: ignore[arg-type]
        success=False,
        name=name,
        target_id=target_id,
        error=str(exc),
        error_kind=exc.kind,
    )
