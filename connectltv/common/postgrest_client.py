"""
PostgREST Record Store

Talks to the hosted alumni table through Supabase's PostgREST endpoint.
Search requests become a single `or=(...)` logic tree of `ilike` filters,
one per (term, searchable column) pair, so filtering happens in the store.

Uses httpx.AsyncClient; the client is created lazily on first use.

Usage:
    store = PostgrestRecordStore(
        url="https://project.supabase.co",
        api_key="anon-key",
    )
    rows = await store.retrieve(["ceo", "education"], limit=10)
    await store.close()
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from .record_store import RecordStore, RecordNotFound, RetrievalError
from .schemas import SEARCHABLE_COLUMNS, COLUMN_ID, COLUMN_LINKEDIN, COLUMN_ENRICHMENT

logger = logging.getLogger("connectltv.common.postgrest")

DEFAULT_TABLE = "LTV Alumni Database"

# Characters PostgREST treats as syntax inside a logic tree
_RESERVED = set(',.:()" ')


def quote_identifier(name: str) -> str:
    """Double-quote a column name when it contains reserved characters"""
    if any(ch in _RESERVED for ch in name):
        escaped = name.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return name


def quote_value(value: str) -> str:
    """Always double-quote a filter value so commas and parens stay literal"""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def like_escape(term: str) -> str:
    """
    Make a term match literally inside an ilike pattern.

    Backslash, % and _ get a backslash escape. PostgREST rewrites every *
    to %, so a literal * cannot be escaped; it becomes the one-character
    wildcard _ instead, and the searcher's own substring check drops any
    extra rows that lets through.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return escaped.replace("*", "_")


def build_or_filter(terms: Sequence[str], columns: Sequence[str]) -> str:
    """
    Build the PostgREST `or` parameter for term x column substring matching.

    Example:
        build_or_filter(["ceo"], ["Title", "First Name"])
        -> '(Title.ilike."*ceo*","First Name".ilike."*ceo*")'
    """
    conditions = [
        f"{quote_identifier(column)}.ilike.{quote_value(f'*{like_escape(term)}*')}"
        for term in terms
        for column in columns
    ]
    return "(" + ",".join(conditions) + ")"


class PostgrestRecordStore(RecordStore):
    """
    Record store backed by a Supabase/PostgREST table.

    Every failure (transport error, timeout, non-2xx response) is raised as
    RetrievalError so callers can tell "no matches" from "search failed".
    """

    name = "postgrest"

    def __init__(
        self,
        url: str,
        api_key: str,
        table: str = DEFAULT_TABLE,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the store.

        Args:
            url: Project URL, e.g. "https://project.supabase.co"
            api_key: Anon or service-role key (sent as apikey and bearer token)
            table: Table holding profile rows
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.url = url.rstrip("/")
        self.table = table
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def table_path(self) -> str:
        return "/" + quote(self.table, safe="")

    def _ensure_client(self) -> httpx.AsyncClient:
        """Create the async HTTP client if not yet created."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self.url}/rest/v1",
                headers={
                    "apikey": self._api_key,
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                },
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        params: Dict[str, Any],
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        client = self._ensure_client()
        try:
            response = await client.request(
                method, self.table_path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.error("Request to %s timed out after %.1fs", self.table, self.timeout)
            raise RetrievalError(f"Record store timed out: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Request to %s failed: %s", self.table, e, exc_info=True)
            raise RetrievalError(f"Record store unreachable: {e}") from e

        if response.status_code >= 400:
            detail = self._error_detail(response)
            logger.error("Record store rejected %s request (%d): %s", method, response.status_code, detail)
            raise RetrievalError(
                f"Record store rejected request ({response.status_code}): {detail}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(payload, dict):
            return payload.get("message") or payload.get("error") or str(payload)
        return str(payload)

    @staticmethod
    def _rows(response: httpx.Response) -> List[Dict[str, Any]]:
        try:
            payload = response.json()
        except ValueError as e:
            raise RetrievalError(f"Record store returned invalid JSON: {e}") from e
        if not isinstance(payload, list):
            raise RetrievalError(f"Expected a list of rows, got {type(payload).__name__}")
        return [row for row in payload if isinstance(row, dict)]

    async def retrieve(self, terms: Sequence[str], limit: int) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"select": "*", "limit": limit}
        if terms:
            params["or"] = build_or_filter(terms, list(SEARCHABLE_COLUMNS.values()))
        logger.debug("Retrieving from %s with params %s", self.table, params)

        response = await self._request("GET", params)
        rows = self._rows(response)
        logger.debug("Store returned %d rows", len(rows))
        return rows

    async def fetch_by_id(self, record_id: int) -> Dict[str, Any]:
        params = {"select": "*", COLUMN_ID: f"eq.{record_id}", "limit": 1}
        rows = self._rows(await self._request("GET", params))
        if not rows:
            raise RecordNotFound(record_id)
        return rows[0]

    async def fetch_enrichment_text(self, record_id: int) -> Optional[str]:
        params = {
            "select": f"{COLUMN_ID},{quote_identifier(COLUMN_ENRICHMENT)}",
            COLUMN_ID: f"eq.{record_id}",
            "limit": 1,
        }
        rows = self._rows(await self._request("GET", params))
        if not rows:
            raise RecordNotFound(record_id)
        return rows[0].get(COLUMN_ENRICHMENT) or None

    async def list_unenriched(self, limit: int) -> List[Dict[str, Any]]:
        params = {
            "select": "*",
            COLUMN_ENRICHMENT: "is.null",
            COLUMN_LINKEDIN: "not.is.null",
            "limit": limit,
        }
        return self._rows(await self._request("GET", params))

    async def update_enrichment_text(self, record_id: int, text: str) -> None:
        await self._request(
            "PATCH",
            {COLUMN_ID: f"eq.{record_id}"},
            json={COLUMN_ENRICHMENT: text},
            headers={"Prefer": "return=minimal"},
        )

    async def health_check(self) -> bool:
        """
        Check if the table answers a one-row query.
        Never raises; failures are logged and reported as False.
        """
        try:
            await self._request("GET", {"select": COLUMN_ID, "limit": 1})
            return True
        except RetrievalError as e:
            logger.warning("Record store health check failed: %s", e)
            return False
