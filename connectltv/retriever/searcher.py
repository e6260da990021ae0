"""
Searcher

Fetches candidate profiles from the record store and orders them.
Filtering is term x field substring containment done by the store;
ranking by field weights happens here.
"""

import logging
from typing import List, Optional

from ..common.record_store import RecordStore
from ..common.schemas import ProfileRecord, SEARCHABLE_COLUMNS
from .query_processor import ParsedQuery
from .ranker import Ranker

logger = logging.getLogger("connectltv.retriever.searcher")

RETURN_NONE = "return_none"
RETURN_ALL = "return_all"


def is_candidate(record: ProfileRecord, terms) -> bool:
    """True if at least one term is a substring of at least one searchable field"""
    fields = [record.field_text(name).lower() for name in SEARCHABLE_COLUMNS]
    return any(term.lower() in text for term in terms for text in fields if text)


class Searcher:
    """
    Searches the alumni table for candidate profiles.

    Features:
    - One store request per search (OR across terms and fields)
    - Over-fetch into a candidate pool when ranking is enabled
    - Drops rows that do not actually contain any term
    - Stable field-weight ranking, trimmed to the requested limit
    """

    def __init__(
        self,
        store: RecordStore,
        ranker: Optional[Ranker] = None,
        on_empty_query: str = RETURN_NONE,
        ranking_enabled: bool = True,
        candidate_pool: int = 50,
    ):
        """
        Initialize searcher.

        Args:
            store: Record store to query
            ranker: Field-weight ranker (default weights if omitted)
            on_empty_query: "return_none" (no results) or "return_all"
                (an unfiltered page of records) when the query has no terms
            ranking_enabled: Score and sort candidates before trimming
            candidate_pool: Rows fetched for ranking; never below the limit
        """
        if on_empty_query not in (RETURN_NONE, RETURN_ALL):
            raise ValueError(f"Unknown on_empty_query policy: {on_empty_query}")
        self._store = store
        self._ranker = ranker or Ranker()
        self._on_empty_query = on_empty_query
        self._ranking_enabled = ranking_enabled
        self._candidate_pool = candidate_pool

    @property
    def on_empty_query(self) -> str:
        return self._on_empty_query

    async def search(self, query: ParsedQuery, limit: int) -> List[ProfileRecord]:
        """
        Search for candidate profiles.

        Args:
            query: Parsed query from QueryProcessor
            limit: Maximum number of records returned

        Returns:
            Records ordered by relevance (or store order if ranking is off)

        Raises:
            RetrievalError: If the store fails; never turned into []
        """
        if query.is_empty:
            return await self._search_empty(limit)

        fetch_limit = max(limit, self._candidate_pool) if self._ranking_enabled else limit
        rows = await self._store.retrieve(list(query.terms), fetch_limit)

        candidates = [ProfileRecord.from_row(row) for row in rows]
        accepted = [record for record in candidates if is_candidate(record, query.terms)]
        if len(accepted) < len(candidates):
            logger.warning(
                "Store returned %d rows matching no term; dropped",
                len(candidates) - len(accepted),
            )

        if self._ranking_enabled or len(accepted) > limit:
            accepted = self._ranker.rank(accepted, query.terms)

        logger.info(
            "Search %r: %d candidates, returning %d",
            query.cleaned, len(accepted), min(limit, len(accepted)),
        )
        return accepted[:limit]

    async def _search_empty(self, limit: int) -> List[ProfileRecord]:
        """Apply the configured empty-query policy"""
        if self._on_empty_query == RETURN_NONE:
            logger.info("Empty query: returning no results")
            return []

        logger.info("Empty query: returning an unfiltered page of %d", limit)
        rows = await self._store.retrieve([], limit)
        return [ProfileRecord.from_row(row) for row in rows][:limit]

    async def search_by_id(self, record_id: int) -> ProfileRecord:
        """
        Fetch a specific profile by identifier.

        Raises:
            RecordNotFound: If no row has this id
            RetrievalError: If the store fails
        """
        row = await self._store.fetch_by_id(record_id)
        return ProfileRecord.from_row(row)

    async def get_enrichment_text(self, record_id: int) -> Optional[str]:
        """Biography text for a profile, or None if not enriched yet"""
        return await self._store.fetch_enrichment_text(record_id)
