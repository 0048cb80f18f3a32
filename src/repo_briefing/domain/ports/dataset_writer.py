"""Port: dataset writer — where finished briefing records go."""

from __future__ import annotations

from typing import Protocol

from repo_briefing.domain.entities import BriefingRecord


class DatasetWriter(Protocol):
    """Abstract contract for persisting output records."""

    async def push(self, record: BriefingRecord) -> None:
        """Store one record."""
        ...
