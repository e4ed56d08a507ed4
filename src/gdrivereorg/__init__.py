"""gdrivereorg public API."""

from __future__ import annotations

from gdrivereorg.adapter import parse_external_result
from gdrivereorg.classify import CategoryPolicy, ExtensionPolicy, policy_from_name, propose_structure
from gdrivereorg.compare import ComparisonReport, compare
from gdrivereorg.config import Settings, get_settings
from gdrivereorg.errors import (
    ApiError,
    AuthError,
    ConflictError,
    ExternalServiceError,
    GDriveReorgError,
    InvalidInputError,
    InvalidShapeError,
    InvalidStateError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    OperationError,
    PermissionError,
    PlanConfigurationError,
    QuotaExceededError,
    RateLimitError,
    UnresolvedPlaceholderError,
    describe_error,
)
from gdrivereorg.executor import LoggingObserver, PlanExecutor, ProgressEmitter, ProgressEvent
from gdrivereorg.manager import ReorganizationManager
from gdrivereorg.models import ApplyResult, FileRecord, OperationResult
from gdrivereorg.optimizer import OptimizationResult, StructureOptimizer
from gdrivereorg.plan import EmptyParentPolicy, ReorgPlan, diff
from gdrivereorg.provider import DriveStorageProvider, InMemoryProvider, StorageProvider
from gdrivereorg.tree import build_tree, normalize

__all__ = [
    # High-level
    "ReorganizationManager",
    "StructureOptimizer",
    "OptimizationResult",
    "Settings",
    "get_settings",
    # Engine
    "normalize",
    "build_tree",
    "propose_structure",
    "CategoryPolicy",
    "ExtensionPolicy",
    "policy_from_name",
    "parse_external_result",
    "diff",
    "EmptyParentPolicy",
    "ReorgPlan",
    "PlanExecutor",
    "ProgressEmitter",
    "ProgressEvent",
    "LoggingObserver",
    "compare",
    "ComparisonReport",
    # Providers
    "StorageProvider",
    "DriveStorageProvider",
    "InMemoryProvider",
    # Models
    "FileRecord",
    "OperationResult",
    "ApplyResult",
    # Errors
    "GDriveReorgError",
    "InvalidInputError",
    "InvalidStateError",
    "PlanConfigurationError",
    "ExternalServiceError",
    "MalformedResponseError",
    "InvalidShapeError",
    "OperationError",
    "UnresolvedPlaceholderError",
    "AuthError",
    "PermissionError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "describe_error",
]
