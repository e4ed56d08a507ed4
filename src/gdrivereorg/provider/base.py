"""Storage provider protocol consumed by the executor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

from gdrivereorg.controller.fields import DEFAULT_LIST_QUERY, FILE_FIELDS
from gdrivereorg.models import FileRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FilePage:
    """One page of list results."""

    files: list[FileRecord] = field(default_factory=list)
    next_page_token: Optional[str] = None


@runtime_checkable
class StorageProvider(Protocol):
    """
    Asynchronous file storage operations.

    Implementations raise OperationError subclasses on failure and never
    retry on the engine's behalf.
    """

    async def list_files(self, query: str, page_token: Optional[str] = None) -> FilePage:
        ...

    async def get_file(self, file_id: str, fields: str = FILE_FIELDS) -> FileRecord:
        ...

    async def create_folder(self, name: str, parent_id: str) -> FileRecord:
        ...

    async def update_parents(
        self,
        file_id: str,
        add_parent_id: str,
        remove_parent_id: Optional[str] = None,
    ) -> FileRecord:
        ...

    async def delete_file(self, file_id: str) -> None:
        ...


async def fetch_all_files(
    provider: StorageProvider,
    query: str = DEFAULT_LIST_QUERY,
) -> list[FileRecord]:
    """Follow next_page_token until the listing is exhausted."""
    files: list[FileRecord] = []
    page_token: Optional[str] = None
    pages = 0

    while True:
        page = await provider.list_files(query, page_token)
        files.extend(page.files)
        pages += 1
        page_token = page.next_page_token
        if not page_token:
            break

    logger.info("Fetched %d files in %d page(s)", len(files), pages)
    return files
