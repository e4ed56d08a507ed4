"""Google Drive StorageProvider backed by GoogleDriveController."""

from __future__ import annotations

import asyncio
from typing import Any, Optional, Sequence

from gdrivereorg.controller import GoogleDriveController
from gdrivereorg.controller.fields import FILE_FIELDS
from gdrivereorg.models import FileRecord

from .base import FilePage


class DriveStorageProvider:
    """Runs the blocking Drive client calls in worker threads."""

    def __init__(self, controller: GoogleDriveController) -> None:
        self._controller = controller

    @classmethod
    def from_service(cls, service: Any, *, supports_all_drives: bool = True) -> "DriveStorageProvider":
        return cls(
            GoogleDriveController.from_service(service, supports_all_drives=supports_all_drives)
        )

    @classmethod
    def from_token_file(
        cls,
        token_file: str,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> "DriveStorageProvider":
        return cls(GoogleDriveController.from_token_file(token_file, scopes=scopes))

    async def list_files(self, query: str, page_token: Optional[str] = None) -> FilePage:
        page = await asyncio.to_thread(self._controller.list_files, query, page_token)
        return FilePage(files=page.files, next_page_token=page.next_page_token)

    async def get_file(self, file_id: str, fields: str = FILE_FIELDS) -> FileRecord:
        return await asyncio.to_thread(self._controller.get_file, file_id, fields)

    async def create_folder(self, name: str, parent_id: str) -> FileRecord:
        return await asyncio.to_thread(self._controller.create_folder, name, parent_id)

    async def update_parents(
        self,
        file_id: str,
        add_parent_id: str,
        remove_parent_id: Optional[str] = None,
    ) -> FileRecord:
        return await asyncio.to_thread(
            self._controller.update_parents, file_id, add_parent_id, remove_parent_id
        )

    async def delete_file(self, file_id: str) -> None:
        await asyncio.to_thread(self._controller.delete_file, file_id)
