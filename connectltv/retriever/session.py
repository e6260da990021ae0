"""
Search Session

Last-request-wins helper for interactive callers: when a newer query is
submitted while an older one is still waiting on the store, the older result
is discarded instead of being shown for the newer query.
"""

import logging
from typing import List, Optional

from ..common.schemas import SearchResult
from .pipeline import DirectorySearch

logger = logging.getLogger("connectltv.retriever.session")


class SearchSession:
    """
    Tracks the most recent submission for one caller (one search box).

    No locks: the generation counter is only touched from the event loop,
    and each search call owns its own results.
    """

    def __init__(self, search: DirectorySearch):
        self._search = search
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def submit(self, query: str, limit: Optional[int] = None) -> Optional[List[SearchResult]]:
        """
        Run a search and return its results only if it is still the latest.

        Returns:
            Results, or None when a newer submit started meanwhile

        Raises:
            RetrievalError: If the store fails and this request is still current
        """
        self._generation += 1
        mine = self._generation
        try:
            results = await self._search.search(query, limit)
        except Exception:
            if mine != self._generation:
                logger.debug("Dropping failure of superseded query %r", query)
                return None
            raise

        if mine != self._generation:
            logger.debug("Discarding stale results for %r", query)
            return None
        return results
