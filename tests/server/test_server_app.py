import unittest

from fastapi.testclient import TestClient

from gdrivereorg.config import Settings
from gdrivereorg.errors import ExternalServiceError
from gdrivereorg.optimizer import StructureOptimizer
from gdrivereorg.server import create_app

DOC = "application/vnd.google-apps.document"
FOLDER = "application/vnd.google-apps.folder"


class _FailingWorkflow:
    async def run(self, files) -> str:
        raise ExternalServiceError("Workflow API error (503): down", details={"status_code": 503})


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, miso_api_key=None, **kwargs)


def _files() -> list[dict]:
    return [
        {"id": "a", "name": "Plan", "mimeType": DOC, "parents": ["root"]},
        {"id": "b", "name": "Notes", "mimeType": DOC, "parents": ["root"]},
    ]


class TestServerApp(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(_settings()))

    def test_status(self) -> None:
        response = self.client.get("/api/optimize")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "active")
        self.assertFalse(body["hasApiKey"])
        self.assertEqual(body["fallbackMode"], "Local Simulation")
        self.assertEqual(body["version"], "2.0.0")

    def test_optimize_without_key_uses_local_classifier(self) -> None:
        response = self.client.post("/api/optimize", json={"files": _files()})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["metadata"]["aiModel"], "Local-Simulation")
        self.assertEqual(len(body["optimizedFiles"]), 3)

    def test_optimize_rejects_missing_files(self) -> None:
        response = self.client.post("/api/optimize", json={"items": []})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_REQUEST")

    def test_optimize_rejects_invalid_json(self) -> None:
        response = self.client.post(
            "/api/optimize", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_REQUEST")

    def test_optimize_rejects_entries_without_id(self) -> None:
        response = self.client.post("/api/optimize", json={"files": [{"name": "x"}]})
        self.assertEqual(response.status_code, 400)

    def test_workflow_error_without_fallback_is_500(self) -> None:
        settings = _settings(fallback_enabled=False)
        optimizer = StructureOptimizer(settings, workflow=_FailingWorkflow())  # type: ignore[arg-type]
        client = TestClient(create_app(settings, optimizer))

        response = client.post("/api/optimize", json={"files": _files()})

        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["code"], "AI_PROCESSING_ERROR")
        self.assertIn("(503)", body["details"])

    def test_compare_returns_report_and_plan(self) -> None:
        proposed = [
            {"id": "temp_docs", "name": "Documents", "mimeType": FOLDER, "parents": ["root"]},
            {"id": "a", "name": "Plan", "mimeType": DOC, "parents": ["temp_docs"]},
            {"id": "b", "name": "Notes", "mimeType": DOC, "parents": ["temp_docs"]},
        ]
        response = self.client.post("/api/compare", json={"original": _files(), "proposed": proposed})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["plan"]["summary"], {"create": 1, "move": 2, "delete": 0, "skipped": 0})
        self.assertEqual(body["comparison"]["summary"]["totalMovedFiles"], 2)

    def test_compare_invalid_plan(self) -> None:
        proposed = [{"id": "temp_a", "name": "A", "mimeType": FOLDER, "parents": ["temp_b"]},
                    {"id": "temp_b", "name": "B", "mimeType": FOLDER, "parents": ["temp_a"]}]
        response = self.client.post("/api/compare", json={"original": [], "proposed": proposed})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_PLAN")

    def test_compare_requires_both_lists(self) -> None:
        response = self.client.post("/api/compare", json={"original": []})
        self.assertEqual(response.status_code, 400)
        self.assertIn("proposed", response.json()["error"])


if __name__ == "__main__":
    unittest.main()
