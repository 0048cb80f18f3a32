"""Dependency wiring shared by the HTTP API and the command line."""

from __future__ import annotations

import httpx
from fastapi import Request

from repo_briefing.domain.ports.repo_fetcher import RepoFetcher
from repo_briefing.infrastructure.config import Settings, get_settings
from repo_briefing.infrastructure.dataset_writer import JsonlDatasetWriter
from repo_briefing.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_briefing.infrastructure.openai_adapter import OpenAIAdapter
from repo_briefing.services.brief_repo import BriefRepoUseCase
from repo_briefing.services.prompt_builder import PromptLimits


def new_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=httpx.Timeout(30.0))


def build_repo_fetcher(settings: Settings, client: httpx.AsyncClient) -> GitHubRestAdapter:
    """GitHub adapter bound to *client*; build one per client, not per run."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    return GitHubRestAdapter(client=client, token=token, api_url=settings.github_api_url)


def build_use_case(settings: Settings, repo_fetcher: RepoFetcher) -> BriefRepoUseCase:
    """Assemble the use case from settings and a shared repository fetcher."""

    def llm_factory(api_key: str) -> OpenAIAdapter:
        return OpenAIAdapter(
            api_key=api_key, model=settings.ai_model, base_url=settings.ai_base_url
        )

    return BriefRepoUseCase(
        repo_fetcher=repo_fetcher,
        llm_factory=llm_factory,
        dataset_writer=JsonlDatasetWriter(settings.dataset_path),
        limits=PromptLimits(
            max_manifest_chars=settings.max_manifest_chars,
            max_readme_chars=settings.max_readme_chars,
            max_tree_entries=settings.max_tree_entries,
        ),
        manifest_path=settings.manifest_path,
        health_check_key=settings.health_check_key,
    )


def get_use_case(request: Request) -> BriefRepoUseCase:
    """FastAPI dependency: a use case bound to the app-wide repository fetcher."""
    return build_use_case(get_settings(), request.app.state.repo_fetcher)
