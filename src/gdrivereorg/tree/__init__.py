"""Normalization and derived tree views."""

from __future__ import annotations

from .index import RecordIndex, build_tree, resolve_path, resolve_path_parts, tree_to_dicts
from .normalize import normalize, normalize_dicts

__all__ = [
    "normalize",
    "normalize_dicts",
    "RecordIndex",
    "build_tree",
    "resolve_path",
    "resolve_path_parts",
    "tree_to_dicts",
]
