"""
Tests for the Query Processor

Normalization, short-term filtering and deduplication.
"""

import pytest


class TestQueryProcessor:
    """Tests for QueryProcessor"""

    @pytest.fixture
    def processor(self):
        from connectltv.retriever.query_processor import QueryProcessor
        return QueryProcessor()

    def test_parse_lowercases_and_splits(self, processor):
        result = processor.parse("CEO Education")

        assert result.terms == ("ceo", "education")
        assert result.cleaned == "ceo education"
        assert result.original == "CEO Education"

    def test_whitespace_runs_collapse(self, processor):
        result = processor.parse("  growth \t\n  marketing   ")

        assert result.terms == ("growth", "marketing")
        assert result.cleaned == "growth marketing"

    def test_short_terms_dropped(self, processor):
        result = processor.parse("a VP of sales")

        assert result.terms == ("sales",)

    def test_three_letter_terms_kept(self, processor):
        result = processor.parse("ceo cto")

        assert result.terms == ("ceo", "cto")

    def test_duplicate_terms_removed_in_order(self, processor):
        result = processor.parse("Sales fintech SALES sales")

        assert result.terms == ("sales", "fintech")

    def test_empty_query_has_no_terms(self, processor):
        assert processor.parse("").is_empty
        assert processor.parse("   ").is_empty

    def test_only_short_tokens_is_empty(self, processor):
        result = processor.parse("a an of")

        assert result.is_empty
        assert result.cleaned == "a an of"

    def test_none_is_treated_as_empty(self, processor):
        result = processor.parse(None)

        assert result.is_empty
        assert result.original == ""

    def test_punctuation_is_kept_in_terms(self, processor):
        result = processor.parse("B2B, SaaS")

        assert result.terms == ("b2b,", "saas")

    def test_parse_is_idempotent_on_formatted_terms(self, processor):
        first = processor.parse("  Head of PRODUCT  product  ")
        second = processor.parse(processor.format_terms(first))

        assert second.terms == first.terms

    def test_custom_min_term_length(self):
        from connectltv.retriever.query_processor import QueryProcessor
        processor = QueryProcessor(min_term_length=1)

        assert processor.parse("a b").terms == ("a", "b")

    def test_invalid_min_term_length(self):
        from connectltv.retriever.query_processor import QueryProcessor

        with pytest.raises(ValueError):
            QueryProcessor(min_term_length=0)
