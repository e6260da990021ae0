"""
Profile Enricher

Batch job that fills in biography text for profiles that have a LinkedIn URL
but no enrichment text yet. Runs out of band; nothing it writes feeds back
into ranking.

Pipeline:
1. Select up to `limit` unenriched rows
2. Ask the text source for each profile's biography
3. Write it back to the store
4. Pause between profiles to stay under rate limits
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..common.record_store import RecordStore, RecordStoreError
from ..common.schemas import ProfileRecord
from .profile_source import PlaceholderProfileSource, ProfileSourceError, ProfileTextSource

logger = logging.getLogger("connectltv.enrichment.enricher")


@dataclass
class EnrichmentReport:
    """Outcome of one enrichment batch"""
    message: str
    completed: int
    total: int
    failed: List[int] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return self.completed - len(self.failed)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "completed": self.completed,
            "total": self.total,
            "failed": list(self.failed),
        }


class ProfileEnricher:
    """
    Enriches a bounded batch of profiles per run.

    A failure on one profile is logged and recorded; the batch continues.
    Only failing to select the batch aborts the run.
    """

    def __init__(
        self,
        store: RecordStore,
        source: Optional[ProfileTextSource] = None,
        batch_size: int = 5,
        delay_seconds: float = 0.5,
    ):
        """
        Initialize enricher.

        Args:
            store: Record store with write access
            source: Biography text source (placeholder if omitted)
            batch_size: Default number of profiles per run
            delay_seconds: Pause between profiles
        """
        self._store = store
        self._source = source or PlaceholderProfileSource()
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds

    async def run(self, limit: Optional[int] = None) -> EnrichmentReport:
        """
        Enrich up to `limit` profiles.

        Raises:
            RetrievalError: If the batch of pending profiles cannot be selected
        """
        batch_limit = limit or self.batch_size
        rows = await self._store.list_unenriched(batch_limit)

        if not rows:
            return EnrichmentReport(message="No profiles left to enrich", completed=0, total=0)

        total = len(rows)
        completed = 0
        failed: List[int] = []

        for index, row in enumerate(rows):
            record = ProfileRecord.from_row(row)
            if not await self._enrich_one(record):
                failed.append(record.id)
            completed += 1

            if self.delay_seconds and index < total - 1:
                await asyncio.sleep(self.delay_seconds)

        logger.info("Enrichment batch done: %d/%d, %d failed", completed, total, len(failed))
        return EnrichmentReport(
            message="Enrichment completed",
            completed=completed,
            total=total,
            failed=failed,
        )

    async def _enrich_one(self, record: ProfileRecord) -> bool:
        """Enrich a single profile; returns False on failure"""
        if not record.linkedin_url:
            logger.info("Profile %d has no LinkedIn URL, skipping", record.id)
            return True

        logger.info("Processing profile %d (%s)", record.id, record.linkedin_url)
        try:
            text = await self._source.fetch(record.linkedin_url)
            await self._store.update_enrichment_text(record.id, text)
        except (ProfileSourceError, RecordStoreError) as e:
            logger.error("Error enriching profile %d: %s", record.id, e)
            return False

        logger.info("Updated profile %d via %s source", record.id, self._source.name)
        return True
