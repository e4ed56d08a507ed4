"""Recovery of proposed structures from external workflow output."""

from __future__ import annotations

from .parser import EXCERPT_LENGTH, hierarchical_to_flat, parse_external_result
from .strategies import DEFAULT_STRATEGIES, ParseStrategy, first_parsed

__all__ = [
    "parse_external_result",
    "hierarchical_to_flat",
    "EXCERPT_LENGTH",
    "ParseStrategy",
    "DEFAULT_STRATEGIES",
    "first_parsed",
]
