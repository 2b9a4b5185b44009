import json

import pytest
from fastapi.testclient import TestClient

from conftest import OIDC_URL, REFRESH_TOKEN, USAGE_URL
from kiro_token_app.main import app, get_pipeline
from kiro_token_library import (
    InputFormatError,
    KiroTokenPipeline,
    MissingCredentialError,
    UpstreamExchangeError,
)


class RaisingPipeline:
    def __init__(self, exc: Exception):
        self.exc = exc
        self.inputs = []

    async def process(self, text: str):
        self.inputs.append(text)
        raise self.exc


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _use_pipeline(pipeline) -> None:
    app.dependency_overrides[get_pipeline] = lambda: pipeline


def test_invalid_json_body(client: TestClient) -> None:
    response = client.post(
        "/api/process", content="{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}
    assert response.headers["cache-control"] == "no-store"


@pytest.mark.parametrize("body", [{}, {"input": ""}, {"input": "   "}, {"input": None}, []])
def test_empty_input(client: TestClient, body) -> None:
    pipeline = RaisingPipeline(AssertionError("pipeline must not run"))
    _use_pipeline(pipeline)

    response = client.post("/api/process", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Empty input"}
    assert pipeline.inputs == []


def test_input_is_stripped_before_processing(client: TestClient) -> None:
    pipeline = RaisingPipeline(InputFormatError())
    _use_pipeline(pipeline)

    client.post("/api/process", json={"input": "  abc \n"})

    assert pipeline.inputs == ["abc"]


@pytest.mark.parametrize("exc", [InputFormatError(), MissingCredentialError()])
def test_user_input_errors_are_400(client: TestClient, exc) -> None:
    _use_pipeline(RaisingPipeline(exc))

    response = client.post("/api/process", json={"input": "something"})

    assert response.status_code == 400
    assert response.json() == {"error": exc.message}


def test_upstream_error_is_500_with_details_outside_prod(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("EXPOSE_ERROR_DETAILS", raising=False)
    _use_pipeline(RaisingPipeline(UpstreamExchangeError(400, "invalid_grant")))

    response = client.post("/api/process", json={"input": "something"})

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"] == "BuilderId refresh failed: HTTP 400 invalid_grant"
    assert "UpstreamExchangeError" in payload["details"]


def test_unexpected_error_hides_details_in_prod(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("APP_ENV", "prod")
    monkeypatch.delenv("EXPOSE_ERROR_DETAILS", raising=False)
    _use_pipeline(RaisingPipeline(RuntimeError("boom")))

    response = client.post("/api/process", json={"input": "something"})

    assert response.status_code == 500
    assert response.json() == {"error": "boom"}


def test_successful_builder_id_request(client: TestClient, http_stub) -> None:
    http_stub.add("POST", OIDC_URL, json={"access_token": "AT1", "expires_in": 3600})
    http_stub.add("GET", USAGE_URL, status_code=403)
    _use_pipeline(KiroTokenPipeline(shared_client=http_stub.client()))
    text = json.dumps({"refreshToken": REFRESH_TOKEN, "clientId": "cid", "clientSecret": "secret"})

    response = client.post("/api/process", json={"input": text})

    assert response.status_code == 200
    payload = response.json()
    assert set(payload) == {"usage", "kiroToken", "isBuilderIdType", "clientIdHashFile"}
    assert payload["kiroToken"]["accessToken"] == "AT1"
    assert payload["isBuilderIdType"] is True
    assert payload["usage"]["remaining"] == "-"
    assert response.headers["cache-control"] == "no-store"


def test_preflight_and_method_handling(client: TestClient) -> None:
    preflight = client.options(
        "/api/process",
        headers={
            "Origin": "https://tools.example.com",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == "*"

    assert client.options("/api/process").status_code == 200
    assert client.get("/api/process").status_code == 405
