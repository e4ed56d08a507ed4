"""Public error exports for gdrivereorg."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ExternalServiceError,
    GDriveReorgError,
    HttpErrorInfo,
    InvalidArgumentError,
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
    map_http_error,
)
from .messages import ErrorExplanation, describe_error

__all__ = [
    "GDriveReorgError",
    "InvalidInputError",
    "PlanConfigurationError",
    "InvalidStateError",
    "ExternalServiceError",
    "MalformedResponseError",
    "InvalidShapeError",
    "OperationError",
    "UnresolvedPlaceholderError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
    "ErrorExplanation",
    "describe_error",
]
