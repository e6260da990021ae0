"""
Retriever - Alumni Directory Search

Key Components:
- QueryProcessor: Normalizes a raw query into match terms
- Searcher: Fetches candidates from the record store
- Ranker: Orders candidates by field-weighted term hits
- RelevanceNarrator: Restates each record's attributes as a relevance note
- DirectorySearch: The search(query, limit) entry point
- SearchSession: Last-request-wins wrapper for interactive callers

Pipeline:
1. Parse user query (trim, lowercase, split, drop short terms)
2. Filter the table: any term in any searchable field
3. Score and stable-sort candidates, trim to limit
4. Narrate relevance text per result
"""

from .query_processor import QueryProcessor, ParsedQuery
from .ranker import Ranker
from .searcher import Searcher
from .narrator import Narrator, RelevanceNarrator
from .pipeline import DirectorySearch
from .session import SearchSession

__all__ = [
    "QueryProcessor",
    "ParsedQuery",
    "Ranker",
    "Searcher",
    "Narrator",
    "RelevanceNarrator",
    "DirectorySearch",
    "SearchSession",
]
