"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel

from repo_briefing.domain.entities import BriefingRecord


class BriefingRequest(BaseModel):
    """Request body for ``POST /briefings``.

    Both fields are optional here so that a missing value reaches the use
    case and is reported as ``MissingFieldError`` like on the command line.
    """

    repo_url: str | None = None
    ai_api_key: str | None = None


class BriefingResponse(BaseModel):
    """Successful response from ``POST /briefings``."""

    repo: str
    description: str | None
    stars: int
    languages: dict[str, int]
    file_tree: list[str]
    purpose: str
    tech_stack: str
    architecture_summary: str
    complexity_score: int

    @classmethod
    def from_record(cls, record: BriefingRecord) -> BriefingResponse:
        return cls(**record.to_dict())


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
