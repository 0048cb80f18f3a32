"""Content transformation — filter the tree, decode and truncate text payloads.

Everything here is pure: same input, same output, no I/O.
"""

from __future__ import annotations

import base64
import binascii
from typing import Sequence

from repo_briefing.domain.entities import FileNode

SKIP_EXTENSIONS: tuple[str, ...] = (
    ".png", ".jpg", ".jpeg", ".svg", ".ico",
    ".lockb", ".lock",
)


def is_skipped(node: FileNode) -> bool:
    """Return *True* if the node is not a file or looks like an image / lock file."""
    if node.type != "blob":
        return True
    return node.path.endswith(SKIP_EXTENSIONS)


def filter_tree(nodes: Sequence[FileNode]) -> list[str]:
    """Return the paths of relevant files, preserving tree order."""
    return [node.path for node in nodes if not is_skipped(node)]


def decode_base64_text(content: str | None) -> str:
    """Decode GitHub's base64 ``content`` field to text.

    GitHub wraps the payload every 60 characters; the newlines are ignored.
    Missing or undecodable payloads yield an empty string.
    """
    if not content:
        return ""
    try:
        raw = base64.b64decode("".join(content.split()))
    except (binascii.Error, ValueError):
        return ""
    return raw.decode("utf-8", errors="replace")


def truncate(text: str, limit: int) -> str:
    return text[: max(limit, 0)]


def truncate_tree(paths: Sequence[str], limit: int) -> list[str]:
    return list(paths[: max(limit, 0)])
