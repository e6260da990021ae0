"""
Directory Search Pipeline

The single caller-facing entry point:
1. Parse the raw query into terms (QueryProcessor)
2. Fetch and rank candidate profiles (Searcher)
3. Attach a relevance note to each (RelevanceNarrator)
"""

import logging
from typing import List, Optional

from ..common.config import SearchConfig
from ..common.record_store import RecordStore
from ..common.schemas import ProfileRecord, SearchResult
from .narrator import Narrator, RelevanceNarrator
from .query_processor import QueryProcessor
from .ranker import Ranker
from .searcher import Searcher

logger = logging.getLogger("connectltv.retriever.pipeline")


class DirectorySearch:
    """
    Search-and-rank over the alumni table.

    Stateless between calls: every search builds its own term set and
    result list, so concurrent calls never share data.
    """

    def __init__(
        self,
        processor: QueryProcessor,
        searcher: Searcher,
        narrator: Optional[Narrator] = None,
        default_limit: int = 10,
        max_limit: int = 50,
    ):
        self._processor = processor
        self._searcher = searcher
        self._narrator = narrator or RelevanceNarrator()
        self.default_limit = default_limit
        self.max_limit = max_limit

    @classmethod
    def from_config(cls, store: RecordStore, config: SearchConfig) -> "DirectorySearch":
        """Wire the pipeline from the search section of ConnectConfig"""
        searcher = Searcher(
            store,
            ranker=Ranker(config.field_weights),
            on_empty_query=config.on_empty_query,
            ranking_enabled=config.ranking_enabled,
            candidate_pool=config.candidate_pool,
        )
        return cls(
            processor=QueryProcessor(min_term_length=config.min_term_length),
            searcher=searcher,
            default_limit=config.default_limit,
            max_limit=config.max_limit,
        )

    def resolve_limit(self, limit: Optional[int]) -> int:
        """
        Apply the default and the ceiling to a requested limit.

        Raises:
            ValueError: If limit is below 1
        """
        if limit is None:
            return self.default_limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        return min(limit, self.max_limit)

    async def search(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        """
        Search profiles for a free-text query.

        Args:
            query: Raw query text
            limit: Maximum results (default_limit if omitted, capped at max_limit)

        Returns:
            Ranked SearchResult list; [] when nothing matches

        Raises:
            RetrievalError: If the record store fails
            ValueError: If limit is below 1
        """
        resolved = self.resolve_limit(limit)
        parsed = self._processor.parse(query)
        logger.debug("Search terms for %r: %s", query, list(parsed.terms))

        records = await self._searcher.search(parsed, resolved)
        return [
            SearchResult.from_record(record, self._narrator.narrate(record, parsed.original))
            for record in records
        ]

    async def get_profile(self, record_id: int) -> ProfileRecord:
        """
        Fetch one profile for the detail view.

        Raises:
            RecordNotFound: If no profile has this id
            RetrievalError: If the record store fails
        """
        return await self._searcher.search_by_id(record_id)

    async def get_profile_result(self, record_id: int) -> SearchResult:
        """Detail view shape: the record's own comments serve as relevance text"""
        record = await self.get_profile(record_id)
        return SearchResult.from_record(record, relevance=record.comments)

    async def get_enrichment_text(self, record_id: int) -> Optional[str]:
        return await self._searcher.get_enrichment_text(record_id)
