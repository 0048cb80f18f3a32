"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from repo_briefing.domain.entities import FileNode, RepoMetadata
from repo_briefing.domain.exceptions import UpstreamError
from repo_briefing.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API.

    Responses below 500 never raise: a non-200 answer is reported to the
    caller as an absent payload.  Server errors and network failures raise
    :class:`UpstreamError`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        api_url: str = _GITHUB_API,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-briefing/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning(
                "No GitHub token configured (GITHUB_TOKEN). "
                "Unauthenticated requests are limited to 60 per hour."
            )

    async def fetch_metadata(self, url: GitHubUrl) -> RepoMetadata | None:
        """GET /repos/{owner}/{repo} → RepoMetadata (``None`` on 404)."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}")
        if resp.status_code == 404:
            return None
        if resp.status_code != 200:
            logger.warning(
                "GitHub returned HTTP %d for %s metadata", resp.status_code, url.full_name
            )
            return RepoMetadata()
        data = self._json_body(resp)
        if not isinstance(data, dict):
            raise UpstreamError(f"Malformed metadata for {url.full_name}: expected a JSON object")
        return RepoMetadata(
            description=data.get("description"),
            stars=data.get("stargazers_count", 0),
        )

    async def fetch_languages(self, url: GitHubUrl) -> dict[str, int]:
        """GET /repos/{owner}/{repo}/languages → {lang: bytes}."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}/languages")
        if resp.status_code != 200:
            logger.debug("No languages for %s (HTTP %d)", url.full_name, resp.status_code)
            return {}
        data = self._json_body(resp)
        return data if isinstance(data, dict) else {}

    async def fetch_readme(self, url: GitHubUrl) -> str | None:
        """GET /repos/{owner}/{repo}/readme → base64 content."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}/readme")
        return self._content_field(resp)

    async def fetch_tree(self, url: GitHubUrl, branch: str) -> list[FileNode] | None:
        """GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1 → [FileNode]."""
        resp = await self._api_get(
            f"/repos/{url.owner}/{url.repo}/git/trees/{branch}",
            params={"recursive": "1"},
        )
        if resp.status_code != 200:
            logger.debug(
                "Tree for %s@%s unavailable (HTTP %d)", url.full_name, branch, resp.status_code
            )
            return None
        data = self._json_body(resp)
        if not isinstance(data, dict):
            return None
        return [
            FileNode(
                path=item["path"],
                type=item.get("type", "blob"),
                size=item.get("size", 0),
            )
            for item in data.get("tree", [])
            if isinstance(item, dict) and isinstance(item.get("path"), str)
        ]

    async def fetch_file_content(self, url: GitHubUrl, path: str) -> str | None:
        """GET /repos/{owner}/{repo}/contents/{path} → base64 content."""
        resp = await self._api_get(f"/repos/{url.owner}/{url.repo}/contents/{path}")
        return self._content_field(resp)

    @classmethod
    def _content_field(cls, resp: httpx.Response) -> str | None:
        if resp.status_code != 200:
            return None
        data = cls._json_body(resp)
        if not isinstance(data, dict):
            return None
        content = data.get("content")
        return content if isinstance(content, str) and content else None

    @staticmethod
    def _json_body(resp: httpx.Response) -> Any:
        """Decode a 200 body; a non-JSON payload (e.g. a proxy error page) is an upstream fault."""
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"Malformed JSON from {resp.request.url}") from exc

    async def _api_get(
        self,
        endpoint: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GitHub API GET request; statuses below 500 are returned as-is."""
        url = f"{self._api_url}{endpoint}"
        try:
            resp = await self._client.get(
                url, headers=self._api_headers, params=params
            )
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code >= 500:
            raise UpstreamError(
                f"GitHub API returned HTTP {resp.status_code} for {url}"
            )
        return resp
