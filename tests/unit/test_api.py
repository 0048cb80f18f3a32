"""Unit tests for the HTTP interface"""

import asyncio
import logging
from types import SimpleNamespace

import pytest
from conftest import REPO
from fastapi.testclient import TestClient

from repo_briefing.domain.exceptions import RepoBriefingError, RepositoryNotFoundError
from repo_briefing.interface import dependencies
from repo_briefing.interface.app import create_app
from repo_briefing.interface.error_handlers import status_for

RUN_INPUT = {"repo_url": "https://github.com/octo/widgets", "ai_api_key": "sk-test"}


@pytest.fixture
def api(stub_github, make_use_case):
    app = create_app()
    stub_client = stub_github.client()
    app.dependency_overrides[dependencies.get_use_case] = lambda: make_use_case(stub_client)
    with TestClient(app) as client:
        yield client
    asyncio.run(stub_client.aclose())


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_create_briefing(api, writer):
    resp = api.post("/briefings", json=RUN_INPUT)

    assert resp.status_code == 200
    body = resp.json()
    assert body["repo"] == "octo/widgets"
    assert body["stars"] == 42
    assert body["file_tree"] == ["src/index.ts", "package.json"]
    assert body["complexity_score"] == 3
    assert len(writer.records) == 1


def test_missing_field_is_422(api, stub_github):
    resp = api.post("/briefings", json={"repo_url": "https://github.com/octo/widgets"})

    assert resp.status_code == 422
    assert resp.json() == {"status": "error", "message": 'Input "ai_api_key" is required.'}
    assert stub_github.requests == []


def test_invalid_url_is_422(api):
    resp = api.post("/briefings", json={"repo_url": "https://example.com", "ai_api_key": "k"})
    assert resp.status_code == 422
    assert resp.json()["status"] == "error"


def test_not_found_is_404(api, stub_github, writer):
    stub_github.routes[REPO] = (404, {"message": "Not Found"})
    resp = api.post("/briefings", json=RUN_INPUT)

    assert resp.status_code == 404
    assert "not found" in resp.json()["message"]
    assert writer.records == []


def test_upstream_error_is_502(api, stub_github):
    stub_github.routes[f"{REPO}/languages"] = (500, {"message": "boom"})
    assert api.post("/briefings", json=RUN_INPUT).status_code == 502


def test_status_for_falls_back_to_500():
    assert status_for(RepoBriefingError("unmapped")) == 500
    assert status_for(RepositoryNotFoundError("gone")) == 404


def test_repo_fetcher_is_built_once_per_app(caplog):
    app = create_app()
    with caplog.at_level(logging.WARNING, logger="repo_briefing.infrastructure"):
        with TestClient(app):
            request = SimpleNamespace(app=app)
            first = dependencies.get_use_case(request)
            second = dependencies.get_use_case(request)

    assert first is not second
    assert first._fetcher is second._fetcher is app.state.repo_fetcher
    assert caplog.text.count("60 per hour") == 1
