"""Google Drive API controller (blocking; wrapped by DriveStorageProvider)."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from gdrivereorg.errors import (
    ApiError,
    AuthError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    map_http_error,
)
from gdrivereorg.models import FileRecord
from gdrivereorg.util.mime import FOLDER_MIME

from .fields import DEFAULT_PAGE_SIZE, FILE_FIELDS, LIST_FIELDS

T = TypeVar("T")


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


@dataclass(slots=True)
class DrivePage:
    """One page of a files.list response."""

    files: list[FileRecord]
    next_page_token: Optional[str] = None


class GoogleDriveController:
    """
    Drive API v3 controller.

    Notes:
        - The Drive `service` object is NOT exposed.
        - `supports_all_drives` is applied to all requests consistently.
        - 429, 5xx and network failures are retried with exponential backoff.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        credentials: Any,
        *,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives
        self._retry_policy = _RetryPolicy()
        self._service = build("drive", "v3", credentials=credentials, cache_discovery=False)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._retry_policy = _RetryPolicy()
        obj._service = service
        return obj

    @classmethod
    def from_token_file(
        cls,
        token_file: str,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """
        Build from an authorized-user token file (as written by an OAuth flow).

        Raises:
            AuthError: if the token cannot be loaded or refreshed.
        """
        use_scopes = list(scopes) if scopes is not None else list(cls.DEFAULT_SCOPES)
        try:
            creds = Credentials.from_authorized_user_file(token_file, scopes=use_scopes)
        except (OSError, ValueError) as exc:
            raise AuthError(
                "Failed to load token_file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc

        if not creds.valid and creds.refresh_token:
            try:
                creds.refresh(Request())
            except GoogleAuthError as exc:
                raise AuthError(
                    "Failed to refresh OAuth credentials",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

        if not creds.valid:
            raise AuthError(
                "OAuth credentials are not valid",
                details={"token_file": token_file},
            )

        return cls(creds, supports_all_drives=supports_all_drives)

    # ----------------------------
    # Public API
    # ----------------------------
    def list_files(
        self,
        query: str,
        page_token: Optional[str] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> DrivePage:
        req = self._service.files().list(
            q=query,
            fields=LIST_FIELDS,
            pageSize=page_size,
            pageToken=page_token,
            **self._common_list_kwargs(),
        )
        data = self._execute(req.execute)
        files = [_file_dict_to_record(f) for f in data.get("files", []) or []]
        return DrivePage(files=files, next_page_token=data.get("nextPageToken") or None)

    def get_file(self, file_id: str, fields: str = FILE_FIELDS) -> FileRecord:
        req = self._service.files().get(
            fileId=file_id,
            fields=fields,
            **self._common_get_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_record(data)

    def create_folder(self, name: str, parent_id: str) -> FileRecord:
        body = {"name": name, "mimeType": FOLDER_MIME, "parents": [parent_id]}
        req = self._service.files().create(
            body=body,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_record(data)

    def update_parents(
        self,
        file_id: str,
        add_parent_id: str,
        remove_parent_id: Optional[str] = None,
    ) -> FileRecord:
        """
        Add one parent and remove another in a single update.

        The caller names the parent to remove; no extra read is made.
        """
        req = self._service.files().update(
            fileId=file_id,
            addParents=add_parent_id,
            removeParents=remove_parent_id or None,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_record(data)

    def delete_file(self, file_id: str) -> None:
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_write_kwargs(),
        )
        self._execute(req.execute)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_get_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if self._should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, RateLimitError):
            return True
        if isinstance(exc, NetworkError):
            return True
        if isinstance(exc, ApiError):
            status_code = getattr(exc, "details", {}).get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _file_dict_to_record(data: dict[str, Any]) -> FileRecord:
    file_id = data.get("id")
    name = data.get("name", "")
    mime_type = data.get("mimeType", "")
    parents = data.get("parents")

    size = data.get("size")
    if isinstance(size, int):
        size = str(size)

    return FileRecord(
        id=file_id if isinstance(file_id, str) else "",
        name=name if isinstance(name, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=list(parents) if isinstance(parents, list) else None,
        created_time=_str_or_none(data.get("createdTime")),
        modified_time=_str_or_none(data.get("modifiedTime")),
        size=size if isinstance(size, str) else None,
        web_view_link=_str_or_none(data.get("webViewLink")),
    )


def _str_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        payload = _decode_error_payload(content)
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if isinstance(status_code, str) and status_code.isdigit():
        status_code = int(status_code)
    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )


def _decode_error_payload(content: bytes | bytearray) -> Any:
    # Error bodies are not guaranteed to be JSON.
    try:
        return json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
