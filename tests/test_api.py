"""Tests for the HTTP API (FastAPI TestClient against fake providers)."""

import pytest
from fastapi.testclient import TestClient

from neurogame.bootstrap import AppServices
from neurogame.main import create_app
from neurogame.services.generation_service import GenerationService
from neurogame.services.naming_service import NamingService
from tests.fixtures.fake_providers import make_fake_registry
from tests.fixtures.sample_data import NINJA_CAT_TASK, SAMPLE_HTML


def make_client(registry, generation=True, naming=True) -> TestClient:
    services = AppServices(
        providers=registry,
        generation=GenerationService(registry, observer=None) if generation else None,
        naming=NamingService(registry) if naming else None,
    )
    return TestClient(create_app(services))


@pytest.fixture
def client(fake_registry):
    with make_client(fake_registry) as test_client:
        yield test_client


# ==================== Generate ====================


@pytest.mark.integration
class TestGenerateEndpoint:
    def test_success(self, client, calls):
        response = client.post("/api/generate", json={"prompt": NINJA_CAT_TASK})

        assert response.status_code == 200
        assert response.json() == {"html": SAMPLE_HTML}
        assert len(calls) == 9

    def test_task_alias(self, client):
        response = client.post("/api/generate", json={"task": NINJA_CAT_TASK})
        assert response.status_code == 200

    def test_invalid_json(self, client, calls):
        response = client.post(
            "/api/generate",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON in request body"}
        assert calls == []

    @pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}, {"prompt": 7}])
    def test_missing_prompt(self, client, calls, body):
        response = client.post("/api/generate", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        assert calls == []

    def test_stage_failure(self, calls):
        registry = make_fake_registry(calls, fail_stages=["context"])
        with make_client(registry) as client:
            response = client.post("/api/generate", json={"prompt": NINJA_CAT_TASK})

        assert response.status_code == 500
        body = response.json()
        assert body["stage"] == "context"
        assert "context" in body["error"]
        assert "html" not in body
        assert len(calls) == 5

    def test_unavailable_pipeline(self, calls):
        registry = make_fake_registry(calls, include=["openai"])
        with make_client(registry, generation=False) as client:
            response = client.post("/api/generate", json={"prompt": NINJA_CAT_TASK})

        assert response.status_code == 503
        assert "Generation pipeline not available" in response.json()["error"]
        assert calls == []

    def test_bad_request_checked_before_availability(self, calls):
        registry = make_fake_registry(calls, include=["openai"])
        with make_client(registry, generation=False) as client:
            response = client.post("/api/generate", json={"prompt": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}

    def test_list_stages(self, client):
        response = client.get("/api/stages")

        assert response.status_code == 200
        stages = response.json()
        assert len(stages) == 9
        assert stages[0]["id"] == "perception"
        assert stages[-1]["provider"] == "anthropic"


# ==================== Name ====================


@pytest.mark.integration
class TestNameEndpoint:
    def test_success(self, calls):
        registry = make_fake_registry(calls, responses={"naming": "Ninja Cat Dash"})
        with make_client(registry) as client:
            response = client.post("/api/name", json={"prompt": NINJA_CAT_TASK})

        assert response.status_code == 200
        assert response.json() == {"name": "Ninja Cat Dash"}
        assert len(calls) == 1

    def test_missing_prompt(self, client, calls):
        response = client.post("/api/name", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        assert calls == []

    def test_invalid_json(self, client):
        response = client.post(
            "/api/name", content=b"nope", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON in request body"}

    def test_provider_failure(self, calls):
        registry = make_fake_registry(calls, fail_stages=["naming"])
        with make_client(registry) as client:
            response = client.post("/api/name", json={"prompt": NINJA_CAT_TASK})

        assert response.status_code == 500
        assert response.json() == {"error": "Error processing request"}

    def test_naming_without_generation(self, calls):
        registry = make_fake_registry(calls, responses={"naming": "Star Run"}, include=["openai"])
        with make_client(registry, generation=False) as client:
            response = client.post("/api/name", json={"prompt": "space runner"})

        assert response.status_code == 200
        assert response.json() == {"name": "Star Run"}

    def test_unavailable_naming(self, calls):
        registry = make_fake_registry(calls, include=())
        with make_client(registry, generation=False, naming=False) as client:
            missing = client.post("/api/name", json={})
            valid = client.post("/api/name", json={"prompt": NINJA_CAT_TASK})

        assert missing.status_code == 400
        assert missing.json() == {"error": "Prompt is required"}
        assert valid.status_code == 503
        assert "Naming service not available" in valid.json()["error"]


# ==================== Health ====================


@pytest.mark.unit
class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "service": "neurogame",
            "generation_available": True,
            "naming_available": True,
        }

    def test_root_reports_missing_pipeline(self, fake_registry):
        with make_client(fake_registry, generation=False) as client:
            body = client.get("/").json()

        assert body["generation_available"] is False
        assert body["naming_available"] is True
