"""AI workflow client."""

from __future__ import annotations

from .client import DEFAULT_BASE_URL, DEFAULT_USER, WorkflowClient, extract_result_text

__all__ = [
    "WorkflowClient",
    "extract_result_text",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER",
]
