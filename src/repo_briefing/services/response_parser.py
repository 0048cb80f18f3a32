"""Parse the LLM completion into an :class:`AiResult`.

Models often wrap JSON in markdown fences or answer with prose.  A parse
failure is an expected outcome, not an error: the raw text is kept so the
caller still gets something readable.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from repo_briefing.domain.entities import AI_PARSE_FAILED, UNKNOWN, AiResult, ParsedAiResponse

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json|```")


def strip_fences(raw: str) -> str:
    """Remove every ```json / ``` marker and surrounding whitespace."""
    return _FENCE_RE.sub("", raw).strip()


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    if value is None:
        return UNKNOWN
    return str(value)


def _as_score(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return 0


def parse_ai_response(raw: str) -> ParsedAiResponse:
    """Turn raw completion text into a :class:`ParsedAiResponse`. Never raises."""
    cleaned = strip_fences(raw)
    try:
        data: Any = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse AI JSON response: %s", exc)
        data = None

    if not isinstance(data, dict):
        if data is not None:
            logger.error("AI response is JSON but not an object: %s", type(data).__name__)
        fallback = raw.strip() or AI_PARSE_FAILED
        return ParsedAiResponse(result=AiResult(purpose=fallback), ok=False, raw_text=raw)

    defaults = AiResult()
    result = AiResult(
        purpose=_as_text(data["purpose"]) if "purpose" in data else defaults.purpose,
        tech_stack=(
            _as_text(data["tech_stack"]) if "tech_stack" in data else defaults.tech_stack
        ),
        architecture_summary=(
            _as_text(data["architecture_summary"])
            if "architecture_summary" in data
            else defaults.architecture_summary
        ),
        complexity_score=_as_score(data.get("complexity_score", defaults.complexity_score)),
    )
    return ParsedAiResponse(result=result)
