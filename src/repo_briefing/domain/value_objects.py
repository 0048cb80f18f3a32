"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from repo_briefing.domain.exceptions import InvalidRepositoryUrlError, MissingFieldError

_GITHUB_URL_RE = re.compile(r"github\.com/(?P<owner>[^/?#\s]+)/(?P<repo>[^/?#\s]+)")

# Accepted input keys, canonical name first.
_REPO_URL_KEYS = ("repo_url", "repoUrl")
_API_KEY_KEYS = ("ai_api_key", "apiKey", "geminiApiKey")


@dataclass(frozen=True, slots=True)
class GitHubUrl:
    """GitHub repository coordinates parsed from a URL.

    Extracts *owner* and *repo* from anything containing
    ``github.com/<owner>/<repo>``, e.g. ``https://github.com/psf/requests``
    or ``github.com/psf/requests/tree/main``.
    """

    owner: str
    repo: str
    raw: str

    @classmethod
    def from_string(cls, url: str) -> GitHubUrl:
        """Parse a raw URL string."""
        url = url.strip()
        match = _GITHUB_URL_RE.search(url)
        if not match:
            raise InvalidRepositoryUrlError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )
        repo = match["repo"]
        if repo.endswith(".git"):
            repo = repo[: -len(".git")]
        if not repo:
            raise InvalidRepositoryUrlError(f"Invalid GitHub URL: '{url}'.")
        return cls(owner=match["owner"], repo=repo, raw=url)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def _first_present(raw: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


@dataclass(frozen=True, slots=True)
class RunInput:
    """Validated input of one briefing run."""

    repo_url: str
    ai_api_key: str

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> RunInput:
        """Validate a raw input object; both fields must be non-empty."""
        raw = raw or {}
        repo_url = _first_present(raw, _REPO_URL_KEYS)
        if not repo_url:
            raise MissingFieldError(_REPO_URL_KEYS[0])
        ai_api_key = _first_present(raw, _API_KEY_KEYS)
        if not ai_api_key:
            raise MissingFieldError(_API_KEY_KEYS[0])
        return cls(repo_url=repo_url, ai_api_key=ai_api_key)
