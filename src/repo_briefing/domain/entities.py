"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

UNKNOWN = "Unknown"
AI_PARSE_FAILED = "AI Parsing Failed"


@dataclass(frozen=True, slots=True)
class FileNode:
    """A single node from the GitHub tree API (blob or sub-tree)."""

    path: str
    type: str  # "blob" or "tree"
    size: int = 0


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """Description and star count of a GitHub repository."""

    description: str | None = None
    stars: int = 0


@dataclass(frozen=True, slots=True)
class RepoSnapshot:
    """Everything fetched from GitHub for one run, already decoded."""

    metadata: RepoMetadata
    languages: dict[str, int]
    readme: str
    file_tree: list[str]
    manifest: str


@dataclass(frozen=True, slots=True)
class AiResult:
    """Fields the LLM is asked to produce."""

    purpose: str = UNKNOWN
    tech_stack: str = UNKNOWN
    architecture_summary: str = UNKNOWN
    complexity_score: int = 0


@dataclass(frozen=True, slots=True)
class ParsedAiResponse:
    """Outcome of parsing the raw LLM text.

    ``ok`` is *False* when the text was not a JSON object; ``raw_text`` then
    carries the unparsed completion and ``result.purpose`` holds it too.
    """

    result: AiResult
    ok: bool = True
    raw_text: str | None = None


@dataclass(frozen=True, slots=True)
class BriefingRecord:
    """The single record emitted per successful run."""

    repo: str
    description: str | None
    stars: int
    languages: dict[str, int] = field(default_factory=dict)
    file_tree: list[str] = field(default_factory=list)
    purpose: str = UNKNOWN
    tech_stack: str = UNKNOWN
    architecture_summary: str = UNKNOWN
    complexity_score: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
