"""Structure comparison reports."""

from __future__ import annotations

from .reporter import ComparisonReport, FolderChange, MovedFile, compare

__all__ = ["compare", "ComparisonReport", "MovedFile", "FolderChange"]
