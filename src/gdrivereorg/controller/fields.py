"""Field definitions for Google Drive API responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "modifiedTime,"
    "createdTime,"
    "size,"
    "webViewLink"
)

LIST_FIELDS: str = f"nextPageToken,files({FILE_FIELDS})"

DEFAULT_LIST_QUERY: str = "trashed=false and 'me' in owners"

DEFAULT_PAGE_SIZE: int = 1000
