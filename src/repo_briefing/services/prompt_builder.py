"""Prompt builder — renders the single LLM prompt from repository content.

This is the final transformation before text is sent to the model.  Token
counting uses ``tiktoken`` and is informational only: the budgets are
enforced in characters and entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import tiktoken

from repo_briefing.services.content_transformer import truncate, truncate_tree

_ENCODING_NAME = "cl100k_base"  # GPT-4o family

NOT_FOUND = "Not found"

PROMPT_TEMPLATE = """\
You are a Technical Documentation Specialist. Analyze this GitHub repository data.

DATA PROVIDED:
1. PACKAGE.JSON CONTENT:
{manifest}

2. README CONTENT (Truncated):
{readme}

3. FILE STRUCTURE (First {tree_limit} files):
{tree}

---
YOUR TASK:
Produce a JSON object with exactly these four fields:
1. "purpose": Explain what this project DOES, who it is for, and its main features in simple English (2-4 sentences).
2. "tech_stack": The core languages, frameworks, libraries and tools used, as one comma-separated string. No version numbers.
3. "architecture_summary": How the project is organised. Refer to concrete directory names from the file structure (1-3 sentences).
4. "complexity_score": An integer from 1 (trivial) to 10 (very complex) rating the overall complexity of the codebase.

Output strictly valid JSON and nothing else.
"""


@dataclass(frozen=True, slots=True)
class PromptLimits:
    """Character / entry budgets applied before rendering."""

    max_manifest_chars: int = 5_000
    max_readme_chars: int = 15_000
    max_tree_entries: int = 200


def build_prompt(
    manifest: str,
    readme: str,
    file_tree: Sequence[str],
    limits: PromptLimits = PromptLimits(),
) -> str:
    """Render :data:`PROMPT_TEMPLATE` with truncated inputs."""
    manifest_text = truncate(manifest, limits.max_manifest_chars) if manifest else NOT_FOUND
    return PROMPT_TEMPLATE.format(
        manifest=manifest_text,
        readme=truncate(readme, limits.max_readme_chars),
        tree_limit=limits.max_tree_entries,
        tree="\n".join(truncate_tree(file_tree, limits.max_tree_entries)),
    )


_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder  # noqa: PLW0603
    if _encoder is None:
        _encoder = tiktoken.get_encoding(_ENCODING_NAME)
    return _encoder


def count_tokens(text: str) -> int:
    """Return the token count for *text* under cl100k_base."""
    return len(_get_encoder().encode(text))
