"""
Record Store

Abstract interface to the table holding alumni profile rows.
The search core only sends declarative filter/limit requests through it and
receives raw rows back in store order.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence


class RecordStoreError(Exception):
    """Base error for record store operations."""
    pass


class RetrievalError(RecordStoreError):
    """The store was unreachable, rejected the request, or timed out."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RecordNotFound(RecordStoreError):
    """No row exists for the requested identifier."""

    def __init__(self, record_id: int):
        super().__init__(f"No profile with id {record_id}")
        self.record_id = record_id


class RecordStore(ABC):
    """
    Abstract base class for profile row stores.

    Each store must implement:
    - retrieve: OR over every (term, searchable column) substring match
    - fetch_by_id / fetch_enrichment_text: single-row lookups
    - list_unenriched / update_enrichment_text: used by the enrichment job

    Every method raises RetrievalError when the store cannot answer.
    """

    name: str = "store"

    @abstractmethod
    async def retrieve(self, terms: Sequence[str], limit: int) -> List[Dict[str, Any]]:
        """
        Return rows where any term is a case-insensitive substring of any
        searchable column, at most `limit` rows, in store order.

        An empty term list returns an unfiltered page of rows.
        """
        pass

    @abstractmethod
    async def fetch_by_id(self, record_id: int) -> Dict[str, Any]:
        """Return one row, or raise RecordNotFound"""
        pass

    @abstractmethod
    async def fetch_enrichment_text(self, record_id: int) -> Optional[str]:
        """Return the biography text for a row, or None if not enriched yet"""
        pass

    @abstractmethod
    async def list_unenriched(self, limit: int) -> List[Dict[str, Any]]:
        """Rows with a LinkedIn URL and no enrichment text yet"""
        pass

    @abstractmethod
    async def update_enrichment_text(self, record_id: int, text: str) -> None:
        """Store biography text for one row"""
        pass

    async def health_check(self) -> bool:
        """Check if the store answers at all"""
        try:
            await self.retrieve([], 1)
            return True
        except RetrievalError:
            return False

    async def close(self) -> None:
        """Release any held connections"""
        return None
