"""
Relevance Narrator

Writes the short relevance note shown under each search result.

Key principle: only restate what the record itself says.
- No sentence for an empty field
- No mention of query terms
- No claims about why a term matched
"""

from typing import Callable, List, Protocol

from ..common.schemas import ProfileRecord


class Narrator(Protocol):
    """Anything that turns (record, query) into relevance text"""

    def narrate(self, record: ProfileRecord, query: str) -> str:
        ...


# Sentence templates, applied in this order
POSITION_TEMPLATE = "Works as {position} at {company}."
FUNCTION_TEMPLATE = "Expertise in {function}."
STAGE_TEMPLATE = "Experience with {stage} stage companies."


def _position_sentence(record: ProfileRecord) -> str:
    if record.position and record.company:
        return POSITION_TEMPLATE.format(position=record.position, company=record.company)
    return ""


def _function_sentence(record: ProfileRecord) -> str:
    return FUNCTION_TEMPLATE.format(function=record.function) if record.function else ""


def _stage_sentence(record: ProfileRecord) -> str:
    return STAGE_TEMPLATE.format(stage=record.stage) if record.stage else ""


def _comments_sentence(record: ProfileRecord) -> str:
    return record.comments.strip()


SENTENCE_BUILDERS: List[Callable[[ProfileRecord], str]] = [
    _position_sentence,
    _function_sentence,
    _stage_sentence,
    _comments_sentence,
]


class RelevanceNarrator:
    """
    Template-based narrator.

    A richer strategy can replace it as long as it keeps the
    narrate(record, query) -> str contract.
    """

    def narrate(self, record: ProfileRecord, query: str) -> str:
        """
        Build the relevance text for one record.

        Args:
            record: Normalized profile record
            query: Original query text (unused by the template strategy)

        Returns:
            Sentences joined by single spaces; "" if every source field is empty
        """
        sentences = [build(record) for build in SENTENCE_BUILDERS]
        return " ".join(sentence for sentence in sentences if sentence)
