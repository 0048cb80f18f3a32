"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer and
to a non-zero exit code on the command line.  Inner layers raise these; the
outermost handlers translate them.
"""

from __future__ import annotations


class RepoBriefingError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class MissingFieldError(RepoBriefingError):
    """A required input field is absent or empty."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f'Input "{field_name}" is required.')
        self.field_name = field_name


class InvalidRepositoryUrlError(RepoBriefingError):
    """The supplied URL does not contain ``github.com/<owner>/<repo>``."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(RepoBriefingError):
    """The repository does not exist or is private (404)."""


class UpstreamError(RepoBriefingError):
    """GitHub answered with a server error or could not be reached."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoBriefingError):
    """Any error originating from the LLM provider."""
