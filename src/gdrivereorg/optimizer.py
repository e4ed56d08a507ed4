"""Propose a structure via the AI workflow, falling back to local classification."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from gdrivereorg.adapter import parse_external_result
from gdrivereorg.classify import ClassifierPolicy, policy_from_name, propose_structure
from gdrivereorg.config import Settings, get_settings
from gdrivereorg.errors import ExternalServiceError, describe_error
from gdrivereorg.models import FileRecord
from gdrivereorg.util.time import now_utc, to_rfc3339
from gdrivereorg.workflow import WorkflowClient

logger = logging.getLogger(__name__)

AI_MODEL_WORKFLOW: str = "MISO-Workflow-API"
AI_MODEL_LOCAL: str = "Local-Simulation"
AI_MODEL_FALLBACK: str = "Local-Simulation-Fallback"

NO_API_KEY_REASON: str = "Workflow API key is not configured"


@dataclass(slots=True)
class OptimizationMetadata:
    ai_model: str
    timestamp: str
    original_file_count: int
    optimized_file_count: int
    fallback_reason: Optional[str] = None
    original_error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "aiModel": self.ai_model,
            "timestamp": self.timestamp,
            "originalFileCount": self.original_file_count,
            "optimizedFileCount": self.optimized_file_count,
        }
        if self.fallback_reason is not None:
            out["fallbackReason"] = self.fallback_reason
        if self.original_error is not None:
            out["originalError"] = self.original_error
        return out


@dataclass(slots=True)
class OptimizationResult:
    optimized_files: list[FileRecord] = field(default_factory=list)
    metadata: Optional[OptimizationMetadata] = None

    @property
    def used_fallback(self) -> bool:
        return self.metadata is not None and self.metadata.ai_model != AI_MODEL_WORKFLOW

    def to_dict(self) -> dict[str, Any]:
        return {
            "optimizedFiles": [f.to_dict() for f in self.optimized_files],
            "metadata": self.metadata.to_dict() if self.metadata else {},
        }


class StructureOptimizer:
    """
    Produces a proposed structure for a file list.

    Policy:
        - No API key: classify locally, tagged Local-Simulation.
        - Workflow or payload failure: classify locally, tagged
          Local-Simulation-Fallback, unless fallback is disabled.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        workflow: Optional[WorkflowClient] = None,
        policy: Optional[ClassifierPolicy] = None,
        today: Optional[date] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._policy = policy or policy_from_name(
            self._settings.classifier_policy,
            min_group_size=self._settings.min_group_size,
            relocate_existing_folders=self._settings.relocate_existing_folders,
        )
        self._today = today

        if workflow is None and self._settings.has_api_key:
            workflow = WorkflowClient(
                self._settings.miso_api_key or "",
                base_url=self._settings.workflow_base_url,
                user=self._settings.workflow_user,
                timeout_sec=self._settings.workflow_timeout_sec,
            )
        self._workflow = workflow

    @property
    def has_workflow(self) -> bool:
        return self._workflow is not None

    def classify(self, files: Sequence[FileRecord]) -> list[FileRecord]:
        return propose_structure(files, self._policy, today=self._today)

    async def optimize(self, files: Sequence[FileRecord]) -> OptimizationResult:
        if self._workflow is None:
            logger.warning("No workflow API key; using local classification")
            return self._local(files, AI_MODEL_LOCAL, fallback_reason=NO_API_KEY_REASON)

        try:
            text = await self._workflow.run(files)
            proposed = parse_external_result(text)
        except ExternalServiceError as exc:
            if not self._settings.fallback_enabled:
                raise
            explanation = describe_error(exc)
            logger.warning("Workflow failed, using local classification: %s", exc)
            return self._local(
                files,
                AI_MODEL_FALLBACK,
                fallback_reason=explanation.message,
                original_error=str(exc),
            )

        logger.info("Workflow proposed %d records for %d files", len(proposed), len(files))
        return OptimizationResult(
            optimized_files=proposed,
            metadata=OptimizationMetadata(
                ai_model=AI_MODEL_WORKFLOW,
                timestamp=to_rfc3339(now_utc()),
                original_file_count=len(files),
                optimized_file_count=len(proposed),
            ),
        )

    def _local(
        self,
        files: Sequence[FileRecord],
        ai_model: str,
        *,
        fallback_reason: str,
        original_error: Optional[str] = None,
    ) -> OptimizationResult:
        proposed = self.classify(files)
        return OptimizationResult(
            optimized_files=proposed,
            metadata=OptimizationMetadata(
                ai_model=ai_model,
                timestamp=to_rfc3339(now_utc()),
                original_file_count=len(files),
                optimized_file_count=len(proposed),
                fallback_reason=fallback_reason,
                original_error=original_error,
            ),
        )
