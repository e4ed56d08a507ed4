"""Exception hierarchy and HTTP error mapping for gdrivereorg."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveReorgError(Exception):
    """
    Base exception for gdrivereorg.

    Attributes:
        details: Optional structured information (e.g., HTTP status, excerpt).
        cause: Optional original exception that triggered this error.
    """

    kind: str = "generic"

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidInputError(GDriveReorgError):
    """Raised when a request has the wrong shape (not an array, missing field)."""

    kind = "invalid_input"


class PlanConfigurationError(GDriveReorgError):
    """Raised when a proposed structure cannot be turned into a safe plan."""

    kind = "plan_configuration"


class InvalidStateError(GDriveReorgError):
    """Raised when the library is used in an invalid state (e.g., fetch not called)."""

    kind = "invalid_state"


class ExternalServiceError(GDriveReorgError):
    """Raised when the AI workflow fails, is unreachable or times out."""

    kind = "external_service"


class MalformedResponseError(ExternalServiceError):
    """Raised when no JSON value can be recovered from a workflow payload."""

    kind = "malformed_response"


class InvalidShapeError(ExternalServiceError):
    """Raised when a workflow payload parses but is not a list of records."""

    kind = "invalid_shape"


class OperationError(GDriveReorgError):
    """Raised when a single create/move/delete fails against the provider."""

    kind = "operation"


class UnresolvedPlaceholderError(OperationError):
    """Raised when an operation depends on a folder whose creation failed."""

    kind = "unresolved_placeholder"


class AuthError(OperationError):
    """Raised when provider authentication fails (HTTP 401)."""

    kind = "auth"


class PermissionError(OperationError):
    """Raised when access is denied (HTTP 403 non-quota)."""

    kind = "permission"


class InvalidArgumentError(OperationError):
    """Raised when provider request arguments are invalid (HTTP 400)."""

    kind = "invalid_argument"


class NotFoundError(OperationError):
    """Raised when a provider resource is not found (HTTP 404)."""

    kind = "not_found"


class ConflictError(OperationError):
    """Raised when a conflict occurs (HTTP 409/412)."""

    kind = "conflict"


class RateLimitError(OperationError):
    """Raised when rate-limited (HTTP 429)."""

    kind = "rate_limited"


class QuotaExceededError(OperationError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""

    kind = "quota_exceeded"


class NetworkError(OperationError):
    """Raised when network/timeout issues prevent the request."""

    kind = "network"


class ApiError(OperationError):
    """Raised for unclassified provider errors (5xx, unknown 4xx, etc.)."""

    kind = "api"


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivereorg exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> OperationError:
    """
    Map a provider HTTP error to an OperationError subclass.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, or QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
