"""In-memory StorageProvider for tests and dry runs."""

from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from gdrivereorg.controller.fields import FILE_FIELDS
from gdrivereorg.errors import InvalidArgumentError, NotFoundError, OperationError
from gdrivereorg.models import FileRecord
from gdrivereorg.util.ids import ROOT_ID
from gdrivereorg.util.mime import FOLDER_MIME

from .base import FilePage


class InMemoryProvider:
    """
    Dict-backed provider.

    Notes:
        - Every call yields to the event loop once, so concurrent moves
          really interleave.
        - `fail(op, target_id)` makes the next matching call raise.
        - Deleting a folder deletes everything under it.
        - The query string of list_files is ignored.
    """

    def __init__(
        self,
        records: Optional[Iterable[FileRecord]] = None,
        *,
        id_prefix: str = "mem_",
        page_size: int = 100,
    ) -> None:
        self._files: dict[str, FileRecord] = {}
        self._id_prefix = id_prefix
        self._page_size = page_size
        self._counter = 0
        self._failures: dict[tuple[str, str], OperationError] = {}
        self.calls: list[tuple[str, str]] = []

        for record in records or []:
            self._files[record.id] = record.clone()

    # ----------------------------
    # Test helpers
    # ----------------------------
    def fail(self, op: str, target_id: str, exc: Optional[OperationError] = None) -> None:
        """Register a failure for `op` ("create"|"move"|"delete"|"get") on target_id."""
        self._failures[(op, target_id)] = exc or OperationError(
            f"Injected {op} failure", details={"target_id": target_id}
        )

    def snapshot(self) -> list[FileRecord]:
        return [r.clone() for r in self._files.values()]

    def parent_of(self, file_id: str) -> Optional[str]:
        record = self._files.get(file_id)
        if record is None:
            return None
        return record.current_parent

    def has(self, file_id: str) -> bool:
        return file_id in self._files

    # ----------------------------
    # StorageProvider
    # ----------------------------
    async def list_files(self, query: str, page_token: Optional[str] = None) -> FilePage:
        await asyncio.sleep(0)
        self.calls.append(("list", page_token or ""))

        start = int(page_token) if page_token else 0
        records = list(self._files.values())
        end = start + self._page_size
        next_token = str(end) if end < len(records) else None
        return FilePage(files=[r.clone() for r in records[start:end]], next_page_token=next_token)

    async def get_file(self, file_id: str, fields: str = FILE_FIELDS) -> FileRecord:
        await asyncio.sleep(0)
        self.calls.append(("get", file_id))
        self._raise_if_injected("get", file_id)
        return self._require(file_id).clone()

    async def create_folder(self, name: str, parent_id: str) -> FileRecord:
        await asyncio.sleep(0)
        self.calls.append(("create", name))
        self._raise_if_injected("create", name)
        self._require_folder(parent_id)

        self._counter += 1
        folder = FileRecord(
            id=f"{self._id_prefix}{self._counter}",
            name=name,
            mime_type=FOLDER_MIME,
            parents=[parent_id],
        )
        self._files[folder.id] = folder
        return folder.clone()

    async def update_parents(
        self,
        file_id: str,
        add_parent_id: str,
        remove_parent_id: Optional[str] = None,
    ) -> FileRecord:
        await asyncio.sleep(0)
        self.calls.append(("move", file_id))
        self._raise_if_injected("move", file_id)

        record = self._require(file_id)
        self._require_folder(add_parent_id)
        if add_parent_id == file_id:
            raise InvalidArgumentError(
                "Cannot move an item into itself", details={"file_id": file_id}
            )

        parents = [p for p in (record.parents or []) if p and p != remove_parent_id]
        record.parents = [add_parent_id] + [p for p in parents if p != add_parent_id]
        return record.clone()

    async def delete_file(self, file_id: str) -> None:
        await asyncio.sleep(0)
        self.calls.append(("delete", file_id))
        self._raise_if_injected("delete", file_id)
        self._require(file_id)

        doomed = {file_id}
        stack = [file_id]
        while stack:
            current = stack.pop()
            for record in self._files.values():
                if record.current_parent == current and record.id not in doomed:
                    doomed.add(record.id)
                    stack.append(record.id)

        for fid in doomed:
            del self._files[fid]

    # ----------------------------
    # Internals
    # ----------------------------
    def _raise_if_injected(self, op: str, target_id: str) -> None:
        exc = self._failures.pop((op, target_id), None)
        if exc is not None:
            raise exc

    def _require(self, file_id: str) -> FileRecord:
        record = self._files.get(file_id)
        if record is None:
            raise NotFoundError("File not found", details={"file_id": file_id})
        return record

    def _require_folder(self, folder_id: str) -> None:
        if folder_id == ROOT_ID:
            return
        record = self._files.get(folder_id)
        if record is None or not record.is_folder:
            raise NotFoundError("Parent folder not found", details={"parent_id": folder_id})
