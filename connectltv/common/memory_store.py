"""
In-Memory Record Store

Holds raw profile rows in a list and answers the same requests as the hosted
table. Used for local development, demos and tests; also shows that the
retrieve contract does not depend on where rows live.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .record_store import RecordStore, RecordNotFound, RetrievalError
from .schemas import SEARCHABLE_COLUMNS, COLUMN_ID, COLUMN_LINKEDIN, COLUMN_ENRICHMENT, parse_identifier

logger = logging.getLogger("connectltv.common.memory_store")


def row_matches(row: Dict[str, Any], terms: Sequence[str]) -> bool:
    """True if any term is a case-insensitive substring of any searchable column"""
    for column in SEARCHABLE_COLUMNS.values():
        value = row.get(column)
        if not value:
            continue
        haystack = str(value).lower()
        if any(term.lower() in haystack for term in terms):
            return True
    return False


class InMemoryRecordStore(RecordStore):
    """
    List-backed record store.

    Rows keep their insertion order, which plays the role of store order.
    """

    name = "memory"

    def __init__(self, rows: Optional[Iterable[Dict[str, Any]]] = None):
        self._rows: List[Dict[str, Any]] = [dict(row) for row in (rows or [])]
        self._closed = False

    @classmethod
    def from_json_file(cls, path: str) -> "InMemoryRecordStore":
        """
        Load rows from a JSON array of objects keyed by store column names.

        Raises:
            RetrievalError: If the file is missing or not a JSON array
        """
        file_path = Path(path).expanduser()
        try:
            with open(file_path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise RetrievalError(f"Cannot load rows from {file_path}: {e}")

        if not isinstance(data, list):
            raise RetrievalError(f"Expected a JSON array of rows in {file_path}")

        logger.info("Loaded %d rows from %s", len(data), file_path)
        return cls(row for row in data if isinstance(row, dict))

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RetrievalError("In-memory store is closed")

    async def retrieve(self, terms: Sequence[str], limit: int) -> List[Dict[str, Any]]:
        self._ensure_open()
        if not terms:
            return [dict(row) for row in self._rows[:limit]]

        matches = []
        for row in self._rows:
            if row_matches(row, terms):
                matches.append(dict(row))
                if len(matches) >= limit:
                    break
        return matches

    def _find(self, record_id: int) -> Dict[str, Any]:
        for row in self._rows:
            if parse_identifier(row.get(COLUMN_ID)) == record_id:
                return row
        raise RecordNotFound(record_id)

    async def fetch_by_id(self, record_id: int) -> Dict[str, Any]:
        self._ensure_open()
        return dict(self._find(record_id))

    async def fetch_enrichment_text(self, record_id: int) -> Optional[str]:
        self._ensure_open()
        return self._find(record_id).get(COLUMN_ENRICHMENT) or None

    async def list_unenriched(self, limit: int) -> List[Dict[str, Any]]:
        self._ensure_open()
        pending = [
            dict(row) for row in self._rows
            if row.get(COLUMN_LINKEDIN) and row.get(COLUMN_ENRICHMENT) is None
        ]
        return pending[:limit]

    async def update_enrichment_text(self, record_id: int, text: str) -> None:
        self._ensure_open()
        self._find(record_id)[COLUMN_ENRICHMENT] = text

    async def close(self) -> None:
        self._closed = True
