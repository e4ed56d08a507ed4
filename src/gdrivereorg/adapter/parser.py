"""Turn a workflow's text output into FileRecords."""

from __future__ import annotations

import logging
from typing import Any

from gdrivereorg.errors import InvalidInputError, InvalidShapeError, MalformedResponseError
from gdrivereorg.models import FileRecord

from .strategies import DEFAULT_STRATEGIES, ParseStrategy, first_parsed

logger = logging.getLogger(__name__)

EXCERPT_LENGTH: int = 500

_COPIED_FIELDS: tuple[str, ...] = ("createdTime", "modifiedTime", "webViewLink", "size")


def parse_external_result(
    raw_text: str,
    strategies: tuple[ParseStrategy, ...] = DEFAULT_STRATEGIES,
) -> list[FileRecord]:
    """
    Parse a possibly malformed payload into a flat list of FileRecords.

    Raises:
        MalformedResponseError: if no strategy yields a JSON value.
        InvalidShapeError: if the value is not an array of file objects.
    """
    if not isinstance(raw_text, str):
        raise InvalidShapeError(
            "workflow result must be text",
            details={"type": type(raw_text).__name__},
        )

    strategy_name, value = first_parsed(raw_text, strategies)
    if strategy_name is None:
        raise MalformedResponseError(
            "No valid JSON found in workflow result",
            details={"excerpt": raw_text[:EXCERPT_LENGTH]},
        )
    if strategy_name != "direct":
        logger.warning("Workflow result recovered with '%s' strategy", strategy_name)

    if not isinstance(value, list):
        raise InvalidShapeError(
            "Workflow result is not an array",
            details={"type": type(value).__name__},
        )

    if value and _has_nested_children(value):
        value = hierarchical_to_flat(value)

    try:
        records = [FileRecord.from_dict(item) for item in value]
    except InvalidInputError as exc:
        raise InvalidShapeError(str(exc), details=exc.details, cause=exc) from exc

    logger.info("Parsed %d records from workflow result", len(records))
    return records


def hierarchical_to_flat(items: list[Any]) -> list[dict[str, Any]]:
    """
    Depth-first flattening of a nested file tree.

    Only recognized fields are copied. A child without `parents` gets
    parents=[parent id] before its own subtree is visited, so deeper
    descendants see the injected value.
    """
    flat: list[dict[str, Any]] = []
    stack: list[Any] = list(reversed(items))

    while stack:
        item = stack.pop()
        if not isinstance(item, dict):
            raise InvalidShapeError(
                "Workflow result entries must be objects",
                details={"type": type(item).__name__},
            )

        flat_item: dict[str, Any] = {
            "id": item.get("id"),
            "name": item.get("name"),
            "mimeType": item.get("mimeType"),
            "parents": item.get("parents") or [],
        }
        for key in _COPIED_FIELDS:
            if item.get(key):
                flat_item[key] = item[key]
        flat.append(flat_item)

        children = item.get("children")
        if isinstance(children, list) and children:
            for child in children:
                if isinstance(child, dict) and child.get("parents") is None:
                    child["parents"] = [item.get("id")]
            stack.extend(reversed(children))

    return flat


def _has_nested_children(items: list[Any]) -> bool:
    return any(
        isinstance(item, dict) and isinstance(item.get("children"), list) and item["children"]
        for item in items
    )
