"""Brief-repository use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the ports (:class:`RepoFetcher`, :class:`LlmGateway`, :class:`DatasetWriter`)
and the pure service modules.  The interface layer injects concrete adapters
at runtime.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Mapping

from repo_briefing.domain.entities import BriefingRecord, RepoSnapshot
from repo_briefing.domain.exceptions import (
    RepoBriefingError,
    RepositoryNotFoundError,
    UpstreamError,
)
from repo_briefing.domain.ports.dataset_writer import DatasetWriter
from repo_briefing.domain.ports.llm_gateway import LlmGateway
from repo_briefing.domain.ports.repo_fetcher import RepoFetcher
from repo_briefing.domain.value_objects import GitHubUrl, RunInput
from repo_briefing.services.content_transformer import decode_base64_text, filter_tree
from repo_briefing.services.prompt_builder import PromptLimits, build_prompt, count_tokens
from repo_briefing.services.response_parser import parse_ai_response

logger = logging.getLogger(__name__)

PRIMARY_BRANCH = "main"
FALLBACK_BRANCH = "master"

def health_check_record() -> BriefingRecord:
    """A fresh mock record for health-check runs."""
    return BriefingRecord(
        repo="health/check",
        description="Health check mock record. No network requests were made.",
        stars=0,
        languages={},
        file_tree=[],
        purpose="Health check",
        tech_stack="None",
        architecture_summary="None",
        complexity_score=0,
    )

LlmFactory = Callable[[str], LlmGateway]


class BriefRepoUseCase:
    """Orchestrates the full repo → briefing record pipeline.

    Parameters
    ----------
    repo_fetcher:
        Adapter that reads repository data from GitHub.
    llm_factory:
        Builds an LLM gateway for the API key supplied with each run.
    dataset_writer:
        Sink for the finished record.
    limits:
        Truncation budgets applied when rendering the prompt.
    manifest_path:
        Repository path of the manifest file sent to the model.
    health_check_key:
        API-key value that skips the pipeline and emits a mock record.
    """

    def __init__(
        self,
        repo_fetcher: RepoFetcher,
        llm_factory: LlmFactory,
        dataset_writer: DatasetWriter,
        limits: PromptLimits = PromptLimits(),
        manifest_path: str = "package.json",
        health_check_key: str | None = "health-check",
    ) -> None:
        self._fetcher = repo_fetcher
        self._llm_factory = llm_factory
        self._writer = dataset_writer
        self._limits = limits
        self._manifest_path = manifest_path
        self._health_check_key = health_check_key

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, raw_input: Mapping[str, Any] | None) -> BriefingRecord:
        """Validate input, run the pipeline, push and return the record."""
        run_input = RunInput.from_mapping(raw_input)

        if self._health_check_key and run_input.ai_api_key == self._health_check_key:
            logger.info("Health-check key supplied; emitting mock record")
            record = health_check_record()
            await self._writer.push(record)
            return record

        url = GitHubUrl.from_string(run_input.repo_url)
        logger.info("Starting analysis for %s", url.full_name)

        try:
            record = await self._brief(url, run_input.ai_api_key)
        except RepoBriefingError as exc:
            logger.error("Fatal error: %s", exc)
            raise

        await self._writer.push(record)
        logger.info("Briefing for %s complete", url.full_name)
        return record

    # ── Pipeline ────────────────────────────────────────────────────────

    async def _brief(self, url: GitHubUrl, api_key: str) -> BriefingRecord:
        snapshot = await self.fetch_snapshot(url)

        prompt = build_prompt(
            snapshot.manifest, snapshot.readme, snapshot.file_tree, self._limits
        )
        logger.info("Sending prompt (%d tokens) to the LLM", count_tokens(prompt))

        llm = self._llm_factory(api_key)
        try:
            raw = await llm.complete(prompt)
        finally:
            await llm.close()

        parsed = parse_ai_response(raw)
        ai = parsed.result
        return BriefingRecord(
            repo=url.full_name,
            description=snapshot.metadata.description,
            stars=snapshot.metadata.stars,
            languages=snapshot.languages,
            file_tree=snapshot.file_tree,
            purpose=ai.purpose,
            tech_stack=ai.tech_stack,
            architecture_summary=ai.architecture_summary,
            complexity_score=ai.complexity_score,
        )

    async def fetch_snapshot(self, url: GitHubUrl) -> RepoSnapshot:
        """Fetch and decode everything the prompt needs, concurrently."""
        logger.info("Fetching metadata, languages, README, tree and %s", self._manifest_path)
        metadata, languages, readme_b64, tree, manifest_b64 = await asyncio.gather(
            self._fetcher.fetch_metadata(url),
            self._fetcher.fetch_languages(url),
            self._fetcher.fetch_readme(url),
            self._fetch_tree_with_fallback(url),
            self._fetcher.fetch_file_content(url, self._manifest_path),
        )

        if metadata is None:
            raise RepositoryNotFoundError(
                f"Repository {url.full_name} not found (or private). "
                "Only public repositories are supported."
            )

        return RepoSnapshot(
            metadata=metadata,
            languages=languages,
            readme=decode_base64_text(readme_b64),
            file_tree=tree,
            manifest=decode_base64_text(manifest_b64),
        )

    async def _fetch_tree_with_fallback(self, url: GitHubUrl) -> list[str]:
        """Try the ``main`` branch, then ``master``; empty list if both fail."""
        try:
            nodes = await self._fetcher.fetch_tree(url, PRIMARY_BRANCH)
        except UpstreamError as exc:
            logger.warning("Tree fetch for %s failed: %s", PRIMARY_BRANCH, exc)
            nodes = None

        if nodes is None:
            logger.warning(
                "No tree on %s for %s, falling back to %s",
                PRIMARY_BRANCH, url.full_name, FALLBACK_BRANCH,
            )
            nodes = await self._fetcher.fetch_tree(url, FALLBACK_BRANCH)

        return filter_tree(nodes or [])
