"""Deterministic classifier policies."""

from __future__ import annotations

from .optimizer import NO_EXTENSION_FOLDER_ID, propose_structure
from .policies import (
    POLICY_NAMES,
    CategoryPolicy,
    ClassifierPolicy,
    ExtensionPolicy,
    policy_from_name,
)

__all__ = [
    "propose_structure",
    "NO_EXTENSION_FOLDER_ID",
    "CategoryPolicy",
    "ExtensionPolicy",
    "ClassifierPolicy",
    "POLICY_NAMES",
    "policy_from_name",
]
