"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_briefing.domain.entities import FileNode, RepoMetadata
from repo_briefing.domain.value_objects import GitHubUrl


class RepoFetcher(Protocol):
    """Abstract contract for fetching GitHub repository data.

    Implementations return "absent" values (``None`` or ``{}``) for
    non-success responses and raise only on transport-level faults.
    """

    async def fetch_metadata(self, url: GitHubUrl) -> RepoMetadata | None:
        """Return repository metadata, or ``None`` when the repository is not found."""
        ...

    async def fetch_languages(self, url: GitHubUrl) -> dict[str, int]:
        """Return language → byte-count mapping from the GitHub Languages API."""
        ...

    async def fetch_readme(self, url: GitHubUrl) -> str | None:
        """Return the base64-encoded README content, or ``None`` when absent."""
        ...

    async def fetch_tree(self, url: GitHubUrl, branch: str) -> list[FileNode] | None:
        """Return the recursive file tree for *branch*, or ``None`` on failure."""
        ...

    async def fetch_file_content(self, url: GitHubUrl, path: str) -> str | None:
        """Return the base64-encoded content of a single file, or ``None`` when absent."""
        ...
