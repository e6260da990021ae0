"""
Tests for the Ranker and the Relevance Narrator
"""

import pytest


def _record(record_id, **fields):
    from connectltv.common.schemas import ProfileRecord
    return ProfileRecord(id=record_id, **fields)


class TestRanker:
    """Tests for Ranker"""

    @pytest.fixture
    def ranker(self):
        from connectltv.retriever.ranker import Ranker
        return Ranker()

    def test_name_hit_outranks_location_hit(self, ranker):
        in_location = _record(1, first_name="Jane", last_name="Doe", location="Austin, TX")
        in_name = _record(2, first_name="Austin", last_name="Lee", location="Boston")

        ranked = ranker.rank([in_location, in_name], ["austin"])

        assert [r.id for r in ranked] == [2, 1]

    def test_score_sums_every_field_hit(self, ranker):
        record = _record(1, position="Growth Lead", function="Growth", comments="growth at scale")

        # position 7 + function 5 + comments 5
        assert ranker.score(record, ["growth"]) == 17

    def test_score_sums_over_terms(self, ranker):
        record = _record(1, position="CEO", company="EduGrowth")

        assert ranker.score(record, ["ceo", "edugrowth"]) == 14

    def test_score_is_case_insensitive(self, ranker):
        record = _record(1, company="FinTech Labs")

        assert ranker.score(record, ["FINTECH"]) == ranker.score(record, ["fintech"]) == 7

    def test_ties_keep_store_order(self, ranker):
        records = [_record(i, company="Acme") for i in (5, 3, 9, 1)]

        ranked = ranker.rank(records, ["acme"])

        assert [r.id for r in ranked] == [5, 3, 9, 1]

    def test_ranking_is_deterministic(self, ranker):
        records = [
            _record(1, location="Berlin"),
            _record(2, first_name="Berlin"),
            _record(3, company="Berlin Ventures"),
        ]

        first = [r.id for r in ranker.rank(records, ["berlin"])]
        second = [r.id for r in ranker.rank(records, ["berlin"])]

        assert first == second == [2, 3, 1]

    def test_empty_fields_never_score(self, ranker):
        record = _record(1)

        assert ranker.score(record, ["anything"]) == 0

    def test_synthetic_weight_table(self):
        from connectltv.retriever.ranker import Ranker
        ranker = Ranker({"location": 100, "name": 1})

        in_location = _record(1, location="Austin")
        in_name = _record(2, first_name="Austin")

        assert [r.id for r in ranker.rank([in_name, in_location], ["austin"])] == [1, 2]

    def test_unknown_field_rejected(self):
        from connectltv.retriever.ranker import Ranker

        with pytest.raises(ValueError):
            Ranker({"salary": 3})

    def test_negative_weight_rejected(self):
        from connectltv.retriever.ranker import Ranker

        with pytest.raises(ValueError):
            Ranker({"name": -1})


class TestRelevanceNarrator:
    """Tests for RelevanceNarrator"""

    @pytest.fixture
    def narrator(self):
        from connectltv.retriever.narrator import RelevanceNarrator
        return RelevanceNarrator()

    def test_position_and_company(self, narrator):
        record = _record(1, position="CEO", company="EduGrowth")

        assert narrator.narrate(record, "CEO education") == "Works as CEO at EduGrowth."

    def test_all_sentences_in_order(self, narrator):
        record = _record(
            1,
            position="VP Sales",
            company="Acme",
            function="Go-to-market",
            stage="Series B",
            comments="  Happy to mentor founders.  ",
        )

        assert narrator.narrate(record, "sales") == (
            "Works as VP Sales at Acme. Expertise in Go-to-market. "
            "Experience with Series B stage companies. Happy to mentor founders."
        )

    def test_position_without_company_is_omitted(self, narrator):
        record = _record(1, position="CTO", function="Engineering")

        assert narrator.narrate(record, "cto") == "Expertise in Engineering."

    def test_all_empty_fields_give_empty_text(self, narrator):
        record = _record(1, first_name="Only", last_name="Name")

        assert narrator.narrate(record, "only") == ""

    def test_query_is_not_echoed(self, narrator):
        record = _record(1, stage="Seed")

        text = narrator.narrate(record, "quantum robotics")

        assert "quantum" not in text
        assert text == "Experience with Seed stage companies."
