"""Shared fixtures: a stubbed GitHub API, a fake LLM and an in-memory dataset."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from repo_briefing.domain.entities import BriefingRecord
from repo_briefing.infrastructure.config import get_settings
from repo_briefing.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_briefing.services.brief_repo import BriefRepoUseCase

API = "https://api.github.com"
REPO = "/repos/octo/widgets"


def b64(text: str) -> str:
    """Encode like the GitHub contents API: base64 wrapped every 60 chars."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60)) + "\n"


def default_routes() -> dict[str, tuple[int, Any]]:
    return {
        REPO: (200, {"description": "Widgets for everyone", "stargazers_count": 42}),
        f"{REPO}/languages": (200, {"TypeScript": 12000, "HTML": 500}),
        f"{REPO}/readme": (200, {"content": b64("# Widgets\nMakes widgets.")}),
        f"{REPO}/git/trees/main": (
            200,
            {
                "tree": [
                    {"path": "src", "type": "tree"},
                    {"path": "src/index.ts", "type": "blob", "size": 120},
                    {"path": "logo.png", "type": "blob", "size": 9000},
                    {"path": "package.json", "type": "blob", "size": 300},
                    {"path": "bun.lockb", "type": "blob", "size": 300},
                ]
            },
        ),
        f"{REPO}/contents/package.json": (
            200,
            {"content": b64('{"name": "widgets", "dependencies": {"react": "^18"}}')},
        ),
    }


@dataclass
class StubGitHub:
    """Route table for ``httpx.MockTransport``; records every request."""

    routes: dict[str, tuple[int, Any]] = field(default_factory=default_routes)
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get(request.url.path, (404, {"message": "Not Found"}))
        if isinstance(body, Exception):
            raise body
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class FakeLlm:
    """In-memory ``LlmGateway`` returning a canned completion."""

    def __init__(self, reply: str | Exception) -> None:
        self.reply = reply
        self.prompts: list[str] = []
        self.api_key: str | None = None
        self.closed = False

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    async def close(self) -> None:
        self.closed = True


class MemoryWriter:
    def __init__(self) -> None:
        self.records: list[BriefingRecord] = []

    async def push(self, record: BriefingRecord) -> None:
        self.records.append(record)


AI_REPLY = "```json\n" + json.dumps(
    {
        "purpose": "A widget factory.",
        "tech_stack": "TypeScript, React",
        "architecture_summary": "Sources live in src/.",
        "complexity_score": 3,
    }
) + "\n```"


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """Keep settings isolated from the developer's environment and ``.env``."""
    for name in ("GITHUB_TOKEN", "GITHUB_TOKEN_SECRET", "AI_BASE_URL", "DATASET_PATH"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _offline_token_count(monkeypatch: pytest.MonkeyPatch) -> None:
    """tiktoken downloads its encoding on first use; count words instead."""
    monkeypatch.setattr(
        "repo_briefing.services.brief_repo.count_tokens", lambda text: len(text.split())
    )


@pytest.fixture
def stub_github() -> StubGitHub:
    return StubGitHub()


@pytest.fixture
def fake_llm() -> FakeLlm:
    return FakeLlm(AI_REPLY)


@pytest.fixture
def writer() -> MemoryWriter:
    return MemoryWriter()


@pytest.fixture
def make_use_case(
    fake_llm: FakeLlm, writer: MemoryWriter
) -> Callable[..., BriefRepoUseCase]:
    def factory(client: httpx.AsyncClient, **kwargs: Any) -> BriefRepoUseCase:
        def llm_factory(api_key: str) -> FakeLlm:
            fake_llm.api_key = api_key
            return fake_llm

        return BriefRepoUseCase(
            repo_fetcher=GitHubRestAdapter(client, token=kwargs.pop("token", None)),
            llm_factory=llm_factory,
            dataset_writer=writer,
            **kwargs,
        )

    return factory
