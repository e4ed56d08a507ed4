"""Human-readable explanations for errors surfaced to end users."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .exceptions import (
    AuthError,
    GDriveReorgError,
    InvalidInputError,
    MalformedResponseError,
    InvalidShapeError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
)


@dataclass(frozen=True)
class ErrorExplanation:
    """Machine-readable kind plus a message suitable for display."""

    kind: str
    message: str


# 400 responses carry a workflow error code somewhere in the text.
_BAD_REQUEST_CODES: tuple[tuple[str, str, str], ...] = (
    ("invalid_param", "invalid_request",
     "Invalid parameters were sent. Check the request data."),
    ("Workflow not published", "invalid_request",
     "The workflow has not been published. Save it in the workflow editor first."),
    ("app_unavailable", "unavailable",
     "The workflow app configuration is unavailable."),
    ("provider_not_initialize", "auth",
     "No usable model credentials are configured for the workflow."),
    ("provider_quota_exceeded", "quota",
     "The model call quota has been exceeded."),
    ("model_currently_not_support", "unavailable",
     "The configured model is currently not available."),
    ("workflow_request_error", "generic",
     "The workflow run failed."),
)

_STATUS_MESSAGES: dict[int, tuple[str, str]] = {
    401: ("auth", "Authentication failed. Check the workflow API key."),
    403: ("auth", "Access denied. Check the permissions of the API key."),
    404: ("not_found", "The requested resource was not found."),
    429: ("rate_limited", "Too many requests. Wait a moment and try again."),
    500: ("unavailable", "The service hit an internal error. Try again later."),
    502: ("unavailable",
          "Gateway error: the service is temporarily unavailable or timed out."),
    503: ("unavailable", "The service is temporarily unavailable. Try again later."),
    504: ("timeout", "The gateway timed out. Try again with fewer files."),
}

_STATUS_IN_TEXT = re.compile(r"\((\d{3})\)")


def describe_error(exc: Optional[BaseException]) -> ErrorExplanation:
    """
    Explain an error by matching its status code and text against known cases.

    Status code comes from `details["status_code"]` when present, otherwise
    from a "(NNN)" fragment in the message.
    """
    if exc is None:
        return ErrorExplanation("generic", "An unknown error occurred.")

    message = str(exc) or exc.__class__.__name__

    if isinstance(exc, InvalidInputError):
        return ErrorExplanation("invalid_input", f"Invalid request: {message}")
    if isinstance(exc, (MalformedResponseError, InvalidShapeError)):
        return ErrorExplanation(
            "malformed_response",
            "The workflow response has an unexpected format. Try again later.",
        )
    if isinstance(exc, QuotaExceededError):
        return ErrorExplanation("quota", "Storage quota exceeded.")
    if isinstance(exc, RateLimitError):
        return ErrorExplanation("rate_limited", _STATUS_MESSAGES[429][1])
    if isinstance(exc, (AuthError, PermissionError)):
        return ErrorExplanation("auth", "Access to the storage provider was denied.")
    if isinstance(exc, NotFoundError):
        return ErrorExplanation("not_found", _STATUS_MESSAGES[404][1])

    status = _status_code_of(exc, message)
    if status == 400:
        for needle, kind, text in _BAD_REQUEST_CODES:
            if needle in message:
                return ErrorExplanation(kind, text)
        return ErrorExplanation(
            "invalid_request", "Bad request. Check the request data."
        )
    if status is not None and status in _STATUS_MESSAGES:
        kind, text = _STATUS_MESSAGES[status]
        return ErrorExplanation(kind, text)

    lowered = message.lower()
    if isinstance(exc, NetworkError) or "network" in lowered or "connect" in lowered:
        return ErrorExplanation(
            "network", "Network connection problem. Check your connection."
        )
    if "timeout" in lowered or "timed out" in lowered:
        return ErrorExplanation("timeout", "The request timed out. Try again later.")
    if "json" in lowered or "parse" in lowered:
        return ErrorExplanation(
            "malformed_response",
            "The workflow response has an unexpected format. Try again later.",
        )

    return ErrorExplanation(
        "generic", f"Error while talking to the workflow service: {message}"
    )


def _status_code_of(exc: BaseException, message: str) -> Optional[int]:
    if isinstance(exc, GDriveReorgError):
        status = exc.details.get("status_code")
        if isinstance(status, int):
            return status

    match = _STATUS_IN_TEXT.search(message)
    if match:
        return int(match.group(1))
    return None
