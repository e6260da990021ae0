"""
ConnectLTV Profile Schemas

Normalized profile rows and the search results built from them.
"""

from .profile_record import (
    ProfileRecord,
    SearchResult,
    parse_identifier,
    SEARCHABLE_COLUMNS,
    COLUMN_ID,
    COLUMN_FIRST_NAME,
    COLUMN_LAST_NAME,
    COLUMN_POSITION,
    COLUMN_COMPANY,
    COLUMN_LOCATION,
    COLUMN_FUNCTION,
    COLUMN_STAGE,
    COLUMN_COMMENTS,
    COLUMN_EMAIL,
    COLUMN_LINKEDIN,
    COLUMN_ENRICHMENT,
)

__all__ = [
    "ProfileRecord",
    "SearchResult",
    "parse_identifier",
    "SEARCHABLE_COLUMNS",
    "COLUMN_ID",
    "COLUMN_FIRST_NAME",
    "COLUMN_LAST_NAME",
    "COLUMN_POSITION",
    "COLUMN_COMPANY",
    "COLUMN_LOCATION",
    "COLUMN_FUNCTION",
    "COLUMN_STAGE",
    "COLUMN_COMMENTS",
    "COLUMN_EMAIL",
    "COLUMN_LINKEDIN",
    "COLUMN_ENRICHMENT",
]
