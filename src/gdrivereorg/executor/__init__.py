"""Plan execution and progress reporting."""

from __future__ import annotations

from .events import LoggingObserver, ProgressEmitter, ProgressEvent, ProgressObserver
from .executor import PlanExecutor
from .id_map import IdMap

__all__ = [
    "PlanExecutor",
    "IdMap",
    "ProgressEvent",
    "ProgressEmitter",
    "ProgressObserver",
    "LoggingObserver",
]
