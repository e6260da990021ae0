"""
Query Processor

Turns a raw free-text expertise query into the term set used for filtering.
Pure: no store access, no side effects, never raises on string input.
"""

import re
from typing import Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedQuery:
    """Parsed representation of a user query"""
    original: str
    cleaned: str
    terms: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """No usable terms survived normalization"""
        return not self.terms


class QueryProcessor:
    """
    Processes user queries for directory search.

    Responsibilities:
    1. Trim, collapse whitespace and lowercase the query
    2. Split into terms on whitespace runs
    3. Drop terms shorter than min_term_length (single letters match everything)
    4. Drop repeated terms, keeping first occurrence order
    """

    def __init__(self, min_term_length: int = 3):
        """
        Initialize query processor.

        Args:
            min_term_length: Shortest term kept; 1 keeps every token
        """
        if min_term_length < 1:
            raise ValueError("min_term_length must be at least 1")
        self.min_term_length = min_term_length

    def parse(self, query: str) -> ParsedQuery:
        """
        Parse a user query into structured form.

        Args:
            query: Raw user query string

        Returns:
            ParsedQuery; check `is_empty` before searching
        """
        cleaned = self._clean_query(query or "")
        return ParsedQuery(
            original=query or "",
            cleaned=cleaned,
            terms=self._extract_terms(cleaned),
        )

    def _clean_query(self, query: str) -> str:
        """Clean and normalize query text"""
        cleaned = query.strip().lower()
        return re.sub(r'\s+', ' ', cleaned)

    def _extract_terms(self, cleaned: str) -> Tuple[str, ...]:
        """Split cleaned text into distinct terms of sufficient length"""
        terms = [
            token for token in cleaned.split(' ')
            if token and len(token) >= self.min_term_length
        ]
        return tuple(dict.fromkeys(terms))

    def format_terms(self, parsed: ParsedQuery) -> str:
        """Space-joined terms; parsing this again yields the same terms"""
        return " ".join(parsed.terms)
