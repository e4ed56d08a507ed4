import json
import unittest

import httpx

from gdrivereorg.errors import ExternalServiceError
from gdrivereorg.models import FileRecord
from gdrivereorg.workflow import WorkflowClient, extract_result_text

BASE_URL = "https://workflow.test/v1"


def _records() -> list[FileRecord]:
    return [
        FileRecord(id="a", name="Plan", mime_type="text/plain", parents=["root"], size="10"),
        FileRecord(id="b", name="Notes", mime_type="text/plain"),
    ]


def _succeeded(outputs: dict) -> dict:
    return {"data": {"status": "succeeded", "outputs": outputs}}


class TestWorkflowClient(unittest.IsolatedAsyncioTestCase):
    def _client(self, handler) -> WorkflowClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        self.addAsyncCleanup(http.aclose)
        return WorkflowClient("secret", base_url=BASE_URL + "/", user="tester", client=http)

    async def test_upload_then_run(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.path == "/v1/files/upload":
                return httpx.Response(201, json={"id": "upload-1"})
            return httpx.Response(200, json=_succeeded({"result": "[]"}))

        text = await self._client(handler).run(_records())

        self.assertEqual(text, "[]")
        self.assertEqual([r.url.path for r in seen], ["/v1/files/upload", "/v1/workflows/run"])
        self.assertTrue(all(r.headers["Authorization"] == "Bearer secret" for r in seen))

        upload_body = seen[0].content
        self.assertIn(b"drive-files-", upload_body)
        self.assertIn(b'"parents":["root"]', upload_body)
        self.assertNotIn(b'"size"', upload_body)

        run_body = json.loads(seen[1].content)
        self.assertEqual(run_body["mode"], "blocking")
        self.assertEqual(run_body["user"], "tester")
        self.assertEqual(
            run_body["inputs"]["input"],
            {"transfer_method": "local_file", "upload_file_id": "upload-1", "type": "document"},
        )

    async def test_upload_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(413, text="too large")

        with self.assertRaises(ExternalServiceError) as ctx:
            await self._client(handler).run(_records())
        self.assertIn("File upload failed (413)", str(ctx.exception))

    async def test_upload_without_id(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        with self.assertRaises(ExternalServiceError):
            await self._client(handler).run(_records())

    async def test_gateway_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/files/upload"):
                return httpx.Response(200, json={"id": "u"})
            return httpx.Response(502, text="bad gateway")

        with self.assertRaises(ExternalServiceError) as ctx:
            await self._client(handler).run(_records())
        self.assertEqual(ctx.exception.details["status_code"], 502)
        self.assertIn("(502)", str(ctx.exception))

    async def test_workflow_error_uses_message_field(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/files/upload"):
                return httpx.Response(200, json={"id": "u"})
            return httpx.Response(400, json={"message": "Workflow not published"})

        with self.assertRaises(ExternalServiceError) as ctx:
            await self._client(handler).run(_records())
        self.assertEqual(str(ctx.exception), "Workflow API error (400): Workflow not published")

    async def test_timeout_is_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with self.assertRaises(ExternalServiceError) as ctx:
            await self._client(handler).run(_records())
        self.assertEqual(str(ctx.exception), "Workflow request timed out")

    async def test_connection_error_is_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(ExternalServiceError) as ctx:
            await self._client(handler).run(_records())
        self.assertIn("Network error contacting workflow", str(ctx.exception))

    def test_missing_api_key(self) -> None:
        with self.assertRaises(ExternalServiceError):
            WorkflowClient("")


class TestExtractResultText(unittest.TestCase):
    def test_prefers_result_key(self) -> None:
        envelope = _succeeded({"answer": "b", "result": "a"})
        self.assertEqual(extract_result_text(envelope), "a")

    def test_falls_back_to_first_value(self) -> None:
        self.assertEqual(extract_result_text(_succeeded({"text": "x"})), "x")

    def test_unwrapped_envelope(self) -> None:
        envelope = {"status": "succeeded", "outputs": {"output": "y"}}
        self.assertEqual(extract_result_text(envelope), "y")

    def test_structured_value_is_serialized(self) -> None:
        text = extract_result_text(_succeeded({"result": [{"id": "a"}]}))
        self.assertEqual(json.loads(text), [{"id": "a"}])

    def test_failed_status(self) -> None:
        envelope = {"data": {"status": "failed", "error": "model crashed"}}
        with self.assertRaises(ExternalServiceError) as ctx:
            extract_result_text(envelope)
        self.assertEqual(str(ctx.exception), "Workflow run failed: model crashed")

    def test_missing_outputs(self) -> None:
        with self.assertRaises(ExternalServiceError):
            extract_result_text({"data": {"status": "succeeded", "outputs": {}}})
        with self.assertRaises(ExternalServiceError):
            extract_result_text(_succeeded({"result": ""}))


if __name__ == "__main__":
    unittest.main()
