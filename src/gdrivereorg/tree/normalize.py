"""Flatten tree-shaped or flat record collections into single-parent lists."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from gdrivereorg.models import FileRecord, records_from_dicts


def normalize(records: Iterable[FileRecord]) -> list[FileRecord]:
    """
    Flatten records (possibly nested through `children`) in pre-order.

    Each output entry is a clone without children. A record without parents
    inherits the enclosing node's ID as parents=[id]; top-level records without
    parents keep them absent (root). Normalizing the output again returns an
    equal list.
    """
    flat: list[FileRecord] = []
    seen: set[int] = set()

    stack: list[tuple[FileRecord, Optional[str]]] = [
        (record, None) for record in reversed(list(records))
    ]
    while stack:
        record, enclosing_id = stack.pop()
        if id(record) in seen:
            continue
        seen.add(id(record))

        if record.parents:
            clone = record.clone()
        elif enclosing_id is not None:
            clone = record.clone(parents=[enclosing_id])
        else:
            clone = record.clone()
        flat.append(clone)

        for child in reversed(record.children):
            stack.append((child, record.id))

    return flat


def normalize_dicts(items: Any) -> list[FileRecord]:
    """Parse provider-style JSON (flat or nested) and normalize it."""
    return normalize(records_from_dicts(items))
