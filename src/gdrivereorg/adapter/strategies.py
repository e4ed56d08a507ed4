"""Ordered JSON recovery strategies for semi-structured workflow output."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional

_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

_MISSING = object()


@dataclass(frozen=True)
class ParseStrategy:
    """A named extractor returning a candidate JSON string, or None."""

    name: str
    extract: Callable[[str], Optional[str]]

    def apply(self, text: str) -> Any:
        """Return the parsed value, or the module sentinel when this strategy fails."""
        candidate = self.extract(text)
        if candidate is None:
            return _MISSING
        try:
            return json.loads(candidate)
        except ValueError:
            return _MISSING


def _whole(text: str) -> Optional[str]:
    return text


def _greedy_array(text: str) -> Optional[str]:
    match = _ARRAY_PATTERN.search(text)
    return match.group(0) if match else None


def _fenced_block(text: str) -> Optional[str]:
    match = _FENCE_PATTERN.search(text)
    return match.group(1) if match else None


def _first_object(text: str) -> Optional[str]:
    match = _OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


DEFAULT_STRATEGIES: tuple[ParseStrategy, ...] = (
    ParseStrategy("direct", _whole),
    ParseStrategy("array", _greedy_array),
    ParseStrategy("fenced", _fenced_block),
    ParseStrategy("object", _first_object),
)


def first_parsed(
    text: str,
    strategies: tuple[ParseStrategy, ...] = DEFAULT_STRATEGIES,
) -> tuple[Optional[str], Any]:
    """
    Apply strategies in order and stop at the first JSON value.

    Returns:
        (strategy name, parsed value), or (None, None) when nothing parsed.
    """
    for strategy in strategies:
        value = strategy.apply(text)
        if value is not _MISSING:
            return strategy.name, value
    return None, None
