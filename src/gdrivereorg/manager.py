"""ReorganizationManager (public entry point)."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from gdrivereorg.compare import ComparisonReport, compare
from gdrivereorg.config import Settings, get_settings
from gdrivereorg.controller.fields import DEFAULT_LIST_QUERY
from gdrivereorg.errors import GDriveReorgError, InvalidStateError
from gdrivereorg.executor import PlanExecutor, ProgressEmitter, ProgressObserver
from gdrivereorg.models import ApplyResult, FileRecord, status_for, summarize_results
from gdrivereorg.optimizer import OptimizationResult, StructureOptimizer
from gdrivereorg.plan import EmptyParentPolicy, ReorgPlan, diff
from gdrivereorg.provider import DriveStorageProvider, StorageProvider, fetch_all_files

logger = logging.getLogger(__name__)


class ReorganizationManager:
    """
    Fetch -> propose -> plan/preview -> apply, over one storage provider.

    The manager keeps the last fetched snapshot and the last proposal so the
    steps can be called one at a time.
    """

    def __init__(
        self,
        provider: StorageProvider,
        *,
        settings: Optional[Settings] = None,
        optimizer: Optional[StructureOptimizer] = None,
        emitter: Optional[ProgressEmitter] = None,
    ) -> None:
        self._provider = provider
        self._settings = settings or get_settings()
        self._optimizer = optimizer or StructureOptimizer(self._settings)
        self._executor = PlanExecutor(
            provider,
            emitter,
            empty_parent_policy=EmptyParentPolicy(self._settings.empty_parent_policy),
        )
        self._original: Optional[list[FileRecord]] = None
        self._proposed: Optional[list[FileRecord]] = None

    @classmethod
    def from_token_file(
        cls,
        token_file: str,
        *,
        settings: Optional[Settings] = None,
    ) -> "ReorganizationManager":
        return cls(DriveStorageProvider.from_token_file(token_file), settings=settings)

    @property
    def original(self) -> list[FileRecord]:
        if self._original is None:
            raise InvalidStateError("No files fetched. Call fetch() first.")
        return self._original

    @property
    def proposed(self) -> list[FileRecord]:
        if self._proposed is None:
            raise InvalidStateError("No proposal yet. Call propose() first.")
        return self._proposed

    @property
    def emitter(self) -> ProgressEmitter:
        return self._executor.emitter

    async def fetch(self, query: str = DEFAULT_LIST_QUERY) -> list[FileRecord]:
        self._original = await fetch_all_files(self._provider, query)
        self._proposed = None
        return list(self._original)

    async def propose(self, files: Optional[Sequence[FileRecord]] = None) -> OptimizationResult:
        """Propose a structure for `files` (default: the fetched snapshot)."""
        source = list(files) if files is not None else self.original
        result = await self._optimizer.optimize(source)
        self._proposed = result.optimized_files
        return result

    def build_plan(
        self,
        proposed: Optional[Sequence[FileRecord]] = None,
    ) -> ReorgPlan:
        return diff(
            self.original,
            proposed if proposed is not None else self.proposed,
            empty_parent_policy=EmptyParentPolicy(self._settings.empty_parent_policy),
        )

    def preview(self, proposed: Optional[Sequence[FileRecord]] = None) -> ComparisonReport:
        return compare(self.original, proposed if proposed is not None else self.proposed)

    async def apply(
        self,
        plan: Optional[ReorgPlan] = None,
        on_progress: Optional[ProgressObserver] = None,
    ) -> ApplyResult:
        """
        Execute a plan (default: the plan for the current proposal).

        Policy:
            - Per-operation failures are recorded; the plan keeps going.
            - After the run the snapshot is re-fetched; a failed refresh is
              reported, not raised.
        """
        use_plan = plan if plan is not None else self.build_plan()
        results = await self._executor.execute(use_plan, on_progress=on_progress)

        summary = summarize_results(results)
        snapshot_refreshed = True
        try:
            await self.fetch()
        except GDriveReorgError as exc:
            logger.warning("Snapshot refresh after apply failed: %s", exc)
            snapshot_refreshed = False
            summary["refresh_failed"] = summary.get("refresh_failed", 0) + 1

        return ApplyResult(
            status=status_for(results),
            results=results,
            id_map=self._executor.last_id_map,
            summary=summary,
            snapshot_refreshed=snapshot_refreshed,
        )
