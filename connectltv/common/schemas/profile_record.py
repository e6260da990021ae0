"""
Profile Record Schema

Core principle: rows from the hosted table are normalized exactly once, here.
Every text field a caller sees is a string; absence is "" and never None.
The only exception is enrichment text, whose absence means "not yet enriched".
"""

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("connectltv.common.schemas")


# ============================================================================
# Store column names (hosted table "LTV Alumni Database")
# ============================================================================

COLUMN_ID = "Index"
COLUMN_FIRST_NAME = "First Name"
COLUMN_LAST_NAME = "Last Name"
COLUMN_POSITION = "Title"
COLUMN_COMPANY = "Company"
COLUMN_LOCATION = "Location"
COLUMN_FUNCTION = "function"
COLUMN_STAGE = "stage"
COLUMN_COMMENTS = "comments"
COLUMN_EMAIL = "Email Address"
COLUMN_LINKEDIN = "LinkedIn URL"
COLUMN_ENRICHMENT = "LinkedIn Scrape"

# Record attribute -> store column, for every field the filter stage searches
SEARCHABLE_COLUMNS: Dict[str, str] = {
    "first_name": COLUMN_FIRST_NAME,
    "last_name": COLUMN_LAST_NAME,
    "position": COLUMN_POSITION,
    "company": COLUMN_COMPANY,
    "location": COLUMN_LOCATION,
    "function": COLUMN_FUNCTION,
    "stage": COLUMN_STAGE,
    "comments": COLUMN_COMMENTS,
}

_TEXT_COLUMNS: Dict[str, str] = {
    **SEARCHABLE_COLUMNS,
    "email": COLUMN_EMAIL,
    "linkedin_url": COLUMN_LINKEDIN,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def parse_identifier(value: Any) -> Optional[int]:
    """Row id as an int, or None when the value is not a usable id"""
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ============================================================================
# Models
# ============================================================================

class ProfileRecord(BaseModel):
    """One alumni profile row, read-only to the search core"""
    model_config = ConfigDict(frozen=True)

    id: int
    first_name: str = ""
    last_name: str = ""
    position: str = ""
    company: str = ""
    location: str = ""
    function: str = ""
    stage: str = ""
    comments: str = ""
    email: str = ""
    linkedin_url: str = ""
    enrichment_text: Optional[str] = None

    @property
    def name(self) -> str:
        """Combined display name"""
        return f"{self.first_name} {self.last_name}".strip()

    def field_text(self, field_name: str) -> str:
        """Text of a searchable field; "name" means the combined full name."""
        if field_name == "name":
            return self.name
        return getattr(self, field_name)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "ProfileRecord":
        """
        Build a record from a raw store row.

        Missing or null text columns become "". A row without a usable
        identifier is kept with id 0 rather than failing the whole request.
        """
        record_id = parse_identifier(row.get(COLUMN_ID))
        if record_id is None:
            logger.warning("Row without a valid %s column: %r", COLUMN_ID, row.get(COLUMN_ID))
            record_id = 0

        values = {attr: _text(row.get(column)) for attr, column in _TEXT_COLUMNS.items()}

        enrichment = row.get(COLUMN_ENRICHMENT)
        enrichment_text = _text(enrichment) if enrichment is not None else None

        return cls(id=record_id, enrichment_text=enrichment_text or None, **values)

    def to_row(self) -> Dict[str, Any]:
        """Inverse of from_row, used to seed the in-memory store"""
        row: Dict[str, Any] = {COLUMN_ID: self.id}
        for attr, column in _TEXT_COLUMNS.items():
            row[column] = getattr(self, attr)
        row[COLUMN_ENRICHMENT] = self.enrichment_text
        return row


class SearchResult(BaseModel):
    """A profile as returned to callers, with its query-specific relevance text"""
    id: int
    name: str = ""
    position: str = ""
    company: str = ""
    email: str = ""
    linkedin_url: str = ""
    relevance: str = Field(default="", description="Narrated explanation of the match")

    @classmethod
    def from_record(cls, record: ProfileRecord, relevance: str) -> "SearchResult":
        return cls(
            id=record.id,
            name=record.name,
            position=record.position,
            company=record.company,
            email=record.email,
            linkedin_url=record.linkedin_url,
            relevance=relevance,
        )
