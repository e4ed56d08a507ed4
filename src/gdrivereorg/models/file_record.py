"""Data model for Drive items."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from gdrivereorg.errors import InvalidInputError
from gdrivereorg.util.ids import ROOT_ID
from gdrivereorg.util.mime import FileKind, is_folder, kind_from_mime


@dataclass(slots=True)
class FileRecord:
    """
    Represents one Drive file or folder.

    Notes:
        - Only parents[0] is authoritative; an absent or empty list means root.
        - children is a transient tree view, never a source of truth.
        - Timestamps, size and web_view_link are carried through untouched.
    """

    id: str
    name: str
    mime_type: str
    parents: Optional[list[str]] = None

    created_time: Optional[str] = None
    modified_time: Optional[str] = None
    size: Optional[str] = None
    web_view_link: Optional[str] = None

    children: list[FileRecord] = field(default_factory=list, compare=False, repr=False)

    @property
    def kind(self) -> FileKind:
        return kind_from_mime(self.mime_type)

    @property
    def is_folder(self) -> bool:
        return is_folder(self.mime_type)

    @property
    def current_parent(self) -> str:
        """Effective parent: parents[0], or root when parents is absent/empty."""
        if self.parents:
            return self.parents[0]
        return ROOT_ID

    def clone(self, *, parents: Optional[list[str]] = None) -> FileRecord:
        """Shallow copy without children; parents may be replaced."""
        new_parents = parents if parents is not None else self.parents
        return FileRecord(
            id=self.id,
            name=self.name,
            mime_type=self.mime_type,
            parents=list(new_parents) if new_parents is not None else None,
            created_time=self.created_time,
            modified_time=self.modified_time,
            size=self.size,
            web_view_link=self.web_view_link,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FileRecord:
        """
        Build a record (and its nested children) from provider-style JSON.

        Raises:
            InvalidInputError: if an item is not an object or has no string id.
        """
        root = _record_from_mapping(data)
        stack: list[tuple[Mapping[str, Any], FileRecord]] = [(data, root)]
        while stack:
            item, record = stack.pop()
            children = item.get("children")
            if not isinstance(children, list):
                continue
            for child in children:
                child_record = _record_from_mapping(child)
                record.children.append(child_record)
                stack.append((child, child_record))
        return root

    def to_dict(self) -> dict[str, Any]:
        """Serialize to provider-style JSON (children are not included)."""
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "parents": list(self.parents) if self.parents is not None else [],
        }
        if self.created_time is not None:
            out["createdTime"] = self.created_time
        if self.modified_time is not None:
            out["modifiedTime"] = self.modified_time
        if self.size is not None:
            out["size"] = self.size
        if self.web_view_link is not None:
            out["webViewLink"] = self.web_view_link
        return out

    def to_compact_dict(self) -> dict[str, Any]:
        """Minimal form sent to the AI workflow (id, name, mimeType, parents)."""
        return {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "parents": list(self.parents) if self.parents else [],
        }


def records_from_dicts(items: Any) -> list[FileRecord]:
    """
    Convert a JSON array into FileRecords.

    Raises:
        InvalidInputError: if items is not a list or contains invalid entries.
    """
    if not isinstance(items, list):
        raise InvalidInputError("files must be an array")
    return [FileRecord.from_dict(item) for item in items]


def _record_from_mapping(data: Any) -> FileRecord:
    if not isinstance(data, Mapping):
        raise InvalidInputError(
            "file entry must be an object",
            details={"type": type(data).__name__},
        )

    file_id = data.get("id")
    if not isinstance(file_id, str) or not file_id:
        raise InvalidInputError("file entry requires a non-empty string id")

    name = data.get("name")
    mime_type = data.get("mimeType")
    parents = data.get("parents")
    if isinstance(parents, list):
        parents = [p if isinstance(p, str) else "" for p in parents]
    else:
        parents = None

    size = data.get("size")
    if isinstance(size, int) and not isinstance(size, bool):
        size = str(size)

    return FileRecord(
        id=file_id,
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=parents,
        created_time=_opt_str(data.get("createdTime")),
        modified_time=_opt_str(data.get("modifiedTime")),
        size=size if isinstance(size, str) else None,
        web_view_link=_opt_str(data.get("webViewLink")),
    )


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None
