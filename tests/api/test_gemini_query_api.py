"""Integration tests for the Gemini query API endpoint."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from gemini_relay.main import app, run
from gemini_relay.core.config import Settings
from gemini_relay.core.dependencies import get_llm_service
from gemini_relay.core.errors import ConfigurationError


class FakeLLM:
    """Stands in for the Gemini API; replays scripted results in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.prompts = []

    async def generate(self, prompt, model=None, **kwargs):
        self.prompts.append(prompt)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def use_llm():
    """Installs a FakeLLM as the LLM service for the duration of a test."""
    def install(*results):
        fake = FakeLLM(*results)
        app.dependency_overrides[get_llm_service] = lambda: fake
        return fake
    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_gemini_query_success(client, use_llm):
    llm = use_llm("4", "🔢 The answer is 4! ✨")

    response = client.post("/api/gemini-query", json={"prompt": "What is 2+2?"})

    assert response.status_code == 200
    assert response.json() == {"response": "🔢 The answer is 4! ✨"}
    assert llm.prompts[0] == "What is 2+2?"
    assert "4" in llm.prompts[1]
    assert len(llm.prompts) == 2


def test_gemini_query_empty_prompt(client, use_llm):
    llm = use_llm()

    response = client.post("/api/gemini-query", json={"prompt": ""})

    assert response.status_code == 400
    assert response.json() == {"message": "Prompt is required."}
    assert llm.prompts == []


def test_gemini_query_missing_prompt(client, use_llm):
    llm = use_llm()

    response = client.post("/api/gemini-query", json={})

    assert response.status_code == 400
    assert response.json() == {"message": "Prompt is required."}
    assert llm.prompts == []


def test_gemini_query_without_body(client, use_llm):
    llm = use_llm()

    response = client.post("/api/gemini-query")

    assert response.status_code == 400
    assert response.json() == {"message": "Prompt is required."}
    assert llm.prompts == []


@pytest.mark.parametrize("body", [[], "What is 2+2?", 42])
def test_gemini_query_body_not_an_object(client, use_llm, body):
    llm = use_llm()

    response = client.post("/api/gemini-query", json=body)

    assert response.status_code == 400
    assert response.json() == {"message": "Prompt is required."}
    assert llm.prompts == []


def test_gemini_query_non_string_prompt(client, use_llm):
    llm = use_llm()

    response = client.post("/api/gemini-query", json={"prompt": 42})

    assert response.status_code == 400
    assert response.json() == {"message": "Prompt must be a string."}
    assert llm.prompts == []


def test_gemini_query_first_call_fails(client, use_llm):
    llm = use_llm(TimeoutError("timeout"), "never used")

    response = client.post("/api/gemini-query", json={"prompt": "What is 2+2?"})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "timeout"
    assert data["message"]
    assert len(llm.prompts) == 1


def test_gemini_query_second_call_fails(client, use_llm):
    use_llm("initial answer text", RuntimeError("quota exceeded"))

    response = client.post("/api/gemini-query", json={"prompt": "What is 2+2?"})

    assert response.status_code == 500
    assert response.json()["error"] == "quota exceeded"
    assert "initial answer text" not in response.text


def test_gemini_query_allows_any_origin(client, use_llm):
    use_llm("4", "four")

    response = client.post(
        "/api/gemini-query",
        json={"prompt": "What is 2+2?"},
        headers={"Origin": "http://localhost:3000"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:3000")


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == app.version


def test_startup_fails_without_api_key():
    settings = Settings(GEMINI_API_KEY=None, _env_file=None)
    with patch("gemini_relay.main.get_settings", return_value=settings):
        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass


def test_startup_succeeds_with_api_key():
    settings = Settings(GEMINI_API_KEY="test-key", _env_file=None)
    with patch("gemini_relay.main.get_settings", return_value=settings):
        with TestClient(app) as client:
            response = client.get("/")
    assert response.status_code == 200
    assert "Gemini Relay" in response.json()["message"]


def test_run_refuses_to_start_without_api_key():
    settings = Settings(GEMINI_API_KEY=None, _env_file=None)
    with patch("gemini_relay.main.get_settings", return_value=settings), \
         patch("gemini_relay.main.uvicorn.run") as mock_uvicorn_run:
        with pytest.raises(SystemExit) as exc_info:
            run()

    assert exc_info.value.code == 1
    mock_uvicorn_run.assert_not_called()


def test_run_starts_uvicorn_with_api_key():
    settings = Settings(GEMINI_API_KEY="test-key", api_port=5050, _env_file=None)
    with patch("gemini_relay.main.get_settings", return_value=settings), \
         patch("gemini_relay.main.uvicorn.run") as mock_uvicorn_run:
        run()

    mock_uvicorn_run.assert_called_once()
    assert mock_uvicorn_run.call_args.args[0] == "gemini_relay.main:app"
    assert mock_uvicorn_run.call_args.kwargs["port"] == 5050
