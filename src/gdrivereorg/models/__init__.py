"""Public model exports for gdrivereorg."""

from __future__ import annotations

from .file_record import FileRecord, records_from_dicts
from .results import (
    ApplyResult,
    ApplyStatus,
    OperationResult,
    OperationType,
    status_for,
    summarize_results,
)

__all__ = [
    "FileRecord",
    "records_from_dicts",
    "OperationType",
    "OperationResult",
    "summarize_results",
    "ApplyResult",
    "ApplyStatus",
    "status_for",
]
