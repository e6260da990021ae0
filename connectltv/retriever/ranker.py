"""
Ranker

Orders candidate profiles by how strongly the query terms hit their fields.
The field-weight table is plain data so weights can be tuned (or replaced by a
synthetic table in tests) without touching control flow.
"""

from typing import Dict, List, Mapping, Optional, Sequence

from ..common.config import DEFAULT_FIELD_WEIGHTS
from ..common.schemas import ProfileRecord, SEARCHABLE_COLUMNS

# "name" scores against the combined full name
RANKABLE_FIELDS = frozenset({"name", *SEARCHABLE_COLUMNS.keys()})


class Ranker:
    """
    Scores candidates by summed field weights and sorts them.

    Score = sum over terms x weighted fields of the field weight, for every
    field that contains the term (case-insensitive substring).
    Sorting is stable: equal scores keep store order.
    """

    def __init__(self, field_weights: Optional[Mapping[str, float]] = None):
        """
        Initialize ranker.

        Args:
            field_weights: Field name -> weight. Defaults to
                name=10, position=7, company=7, function=5, stage=5,
                comments=5, location=3.
        """
        weights = dict(DEFAULT_FIELD_WEIGHTS if field_weights is None else field_weights)
        unknown = set(weights) - RANKABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown ranking fields: {sorted(unknown)}")
        negative = [name for name, weight in weights.items() if weight < 0]
        if negative:
            raise ValueError(f"Negative weights for: {sorted(negative)}")
        self._weights: Dict[str, float] = weights

    @property
    def field_weights(self) -> Dict[str, float]:
        return dict(self._weights)

    def score(self, record: ProfileRecord, terms: Sequence[str]) -> float:
        """Total weight of every (term, field) hit for one record"""
        total = 0.0
        lowered = {name: record.field_text(name).lower() for name in self._weights}
        for term in terms:
            needle = term.lower()
            for name, weight in self._weights.items():
                if needle and needle in lowered[name]:
                    total += weight
        return total

    def rank(self, records: Sequence[ProfileRecord], terms: Sequence[str]) -> List[ProfileRecord]:
        """
        Sort records by descending score.

        Scores are only sort keys; the returned records carry no score.
        """
        scored = [(self.score(record, terms), record) for record in records]
        # sorted() is stable, so ties keep their incoming (store) order
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
        return [record for _, record in scored]
