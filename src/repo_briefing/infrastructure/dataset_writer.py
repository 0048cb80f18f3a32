"""JSON-lines dataset writer — implements the DatasetWriter port."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from repo_briefing.domain.entities import BriefingRecord

logger = logging.getLogger(__name__)


class JsonlDatasetWriter:
    """Append each record as one JSON line to *path*."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def push(self, record: BriefingRecord) -> None:
        line = json.dumps(record.to_dict(), ensure_ascii=False)
        await asyncio.to_thread(self._append, line)
        logger.info("Pushed %s to %s", record.repo, self._path)

    def _append(self, line: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
