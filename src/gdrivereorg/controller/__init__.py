"""Google Drive API controller exports."""

from __future__ import annotations

from .drive_controller import DrivePage, GoogleDriveController
from .fields import DEFAULT_LIST_QUERY, FILE_FIELDS, LIST_FIELDS

__all__ = [
    "GoogleDriveController",
    "DrivePage",
    "DEFAULT_LIST_QUERY",
    "FILE_FIELDS",
    "LIST_FIELDS",
]
