"""Storage providers for gdrivereorg."""

from __future__ import annotations

from .base import FilePage, StorageProvider, fetch_all_files
from .drive import DriveStorageProvider
from .memory import InMemoryProvider

__all__ = [
    "StorageProvider",
    "FilePage",
    "fetch_all_files",
    "DriveStorageProvider",
    "InMemoryProvider",
]
