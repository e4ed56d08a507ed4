"""HTTP client for the external AI workflow."""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Sequence

import httpx

from gdrivereorg.errors import ExternalServiceError
from gdrivereorg.models import FileRecord

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL: str = "https://api.holdings.miso.gs/ext/v1"
DEFAULT_USER: str = "drive-optimizer"
RESULT_KEYS: tuple[str, ...] = ("result", "output", "answer")


class WorkflowClient:
    """
    Uploads a compact file list and runs the workflow in blocking mode.

    The returned text is handed to `parse_external_result` unchanged.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        user: str = DEFAULT_USER,
        timeout_sec: float = 120.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise ExternalServiceError("Workflow API key is not configured")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._user = user
        self._timeout_sec = timeout_sec
        self._client = client

    async def run(self, files: Sequence[FileRecord]) -> str:
        """Upload `files` and return the workflow's text result."""
        compact = [f.to_compact_dict() for f in files]
        content = json.dumps(compact, ensure_ascii=False, separators=(",", ":"))
        filename = f"drive-files-{int(time.time() * 1000)}.txt"
        logger.info(
            "Uploading %d files to workflow (%dKB)", len(compact), round(len(content) / 1024)
        )

        async with self._session() as client:
            uploaded = await self._upload(client, content, filename)
            upload_id = uploaded.get("id")
            if not upload_id:
                raise ExternalServiceError(
                    "Workflow upload response has no file id",
                    details={"response": uploaded},
                )
            envelope = await self._run_workflow(client, str(upload_id))

        return extract_result_text(envelope)

    # ----------------------------
    # Internals
    # ----------------------------
    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self._timeout_sec) as client:
            yield client

    async def _upload(self, client: httpx.AsyncClient, content: str, filename: str) -> dict[str, Any]:
        response = await self._send(
            client,
            "POST",
            f"{self._base_url}/files/upload",
            files={"file": (filename, content.encode("utf-8"), "text/plain")},
            data={"user": self._user},
        )
        if response.is_error:
            raise ExternalServiceError(
                f"File upload failed ({response.status_code}): {response.text}",
                details={"status_code": response.status_code},
            )
        return _json_body(response)

    async def _run_workflow(self, client: httpx.AsyncClient, upload_file_id: str) -> dict[str, Any]:
        body = {
            "inputs": {
                "input": {
                    "transfer_method": "local_file",
                    "upload_file_id": upload_file_id,
                    "type": "document",
                }
            },
            "mode": "blocking",
            "user": self._user,
        }
        response = await self._send(
            client,
            "POST",
            f"{self._base_url}/workflows/run",
            json=body,
            headers={"Accept": "application/json"},
        )
        logger.info("Workflow responded with %s", response.status_code)

        if response.status_code == 502:
            raise ExternalServiceError(
                "Gateway timeout or overload (502): too many files or the request is "
                "too complex. Reduce the number of files or retry later.",
                details={"status_code": 502},
            )
        if response.is_error:
            raise ExternalServiceError(
                f"Workflow API error ({response.status_code}): {_error_message(response)}",
                details={"status_code": response.status_code},
            )
        return _json_body(response)

    async def _send(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._api_key}"}
        headers.update(kwargs.pop("headers", {}) or {})
        try:
            return await client.request(method, url, headers=headers, **kwargs)
        except httpx.TimeoutException as exc:
            raise ExternalServiceError(
                "Workflow request timed out", details={"url": url}, cause=exc
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(
                f"Network error contacting workflow: {exc}", details={"url": url}, cause=exc
            ) from exc


def extract_result_text(envelope: dict[str, Any]) -> str:
    """
    Pull the text result out of a workflow response envelope.

    The envelope may wrap its payload in `data`. The status must be
    "succeeded"; the text is outputs.result, .output, .answer, or the first
    value present.
    """
    data = envelope.get("data", envelope) if isinstance(envelope, dict) else None
    if not isinstance(data, dict):
        raise ExternalServiceError("Workflow response is not an object")

    if data.get("status") != "succeeded":
        raise ExternalServiceError(
            f"Workflow run failed: {data.get('error') or 'unknown error'}",
            details={"status": data.get("status")},
        )

    outputs = data.get("outputs")
    if not isinstance(outputs, dict) or not outputs:
        raise ExternalServiceError("Workflow response has no outputs")

    value: Any = None
    for key in RESULT_KEYS:
        if outputs.get(key):
            value = outputs[key]
            break
    if not value:
        value = next(iter(outputs.values()))
    if not value:
        raise ExternalServiceError("Workflow outputs contain no result")

    if not isinstance(value, str):
        value = json.dumps(value, ensure_ascii=False)
    return value


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise ExternalServiceError(
            "Workflow returned a non-JSON response",
            details={"status_code": response.status_code, "excerpt": response.text[:200]},
            cause=exc,
        ) from exc
    if not isinstance(body, dict):
        raise ExternalServiceError("Workflow returned an unexpected response body")
    return body


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text
