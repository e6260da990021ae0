"""
Tests for the enrichment job

Batch selection, per-profile failure isolation, pacing and the
placeholder text source.
"""

import pytest
from unittest.mock import AsyncMock, patch


class FlakySource:
    """Text source that fails for URLs containing a marker"""

    name = "flaky"

    def __init__(self, fail_marker="company"):
        self.fail_marker = fail_marker
        self.fetched = []

    async def fetch(self, linkedin_url):
        from connectltv.enrichment import ProfileSourceError
        self.fetched.append(linkedin_url)
        if self.fail_marker in linkedin_url:
            raise ProfileSourceError("profile page unavailable")
        return f"About:\nBio for {linkedin_url}"


class TestProfileEnricher:

    @pytest.mark.asyncio
    async def test_enriches_pending_profiles(self, memory_store):
        from connectltv.enrichment import ProfileEnricher
        enricher = ProfileEnricher(memory_store, delay_seconds=0)

        report = await enricher.run()

        assert report.total == 2
        assert report.completed == 2
        assert report.failed == []
        text = await memory_store.fetch_enrichment_text(1)
        assert text.startswith("About:\n")
        assert "janedoe" in text
        # profile 3 was already enriched and is left alone
        assert await memory_store.fetch_enrichment_text(3) == "About:\nAlready enriched."

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, memory_store):
        from connectltv.enrichment import ProfileEnricher
        source = FlakySource()
        enricher = ProfileEnricher(memory_store, source=source, delay_seconds=0)

        report = await enricher.run(5)

        assert report.completed == 2
        assert report.total == 2
        assert report.failed == [4]
        assert report.succeeded == 1
        assert len(source.fetched) == 2
        assert await memory_store.fetch_enrichment_text(4) is None

    @pytest.mark.asyncio
    async def test_limit_bounds_the_batch(self, memory_store):
        from connectltv.enrichment import ProfileEnricher
        enricher = ProfileEnricher(memory_store, delay_seconds=0)

        report = await enricher.run(1)

        assert report.total == 1
        remaining = await memory_store.list_unenriched(10)
        assert [row["Index"] for row in remaining] == [4]

    @pytest.mark.asyncio
    async def test_nothing_left_to_enrich(self, memory_store):
        from connectltv.enrichment import ProfileEnricher
        enricher = ProfileEnricher(memory_store, delay_seconds=0)
        await enricher.run()

        report = await enricher.run()

        assert report.message == "No profiles left to enrich"
        assert report.completed == 0
        assert report.total == 0

    @pytest.mark.asyncio
    async def test_pauses_between_profiles(self, memory_store):
        from connectltv.enrichment import ProfileEnricher
        enricher = ProfileEnricher(memory_store, delay_seconds=0.5)

        with patch("connectltv.enrichment.enricher.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await enricher.run()

        sleep.assert_awaited_once_with(0.5)

    @pytest.mark.asyncio
    async def test_selection_failure_propagates(self, memory_store):
        from connectltv.common.record_store import RetrievalError
        from connectltv.enrichment import ProfileEnricher
        await memory_store.close()
        enricher = ProfileEnricher(memory_store, delay_seconds=0)

        with pytest.raises(RetrievalError):
            await enricher.run()

    @pytest.mark.asyncio
    async def test_report_dict(self, memory_store):
        from connectltv.enrichment import ProfileEnricher
        enricher = ProfileEnricher(memory_store, source=FlakySource(), delay_seconds=0)

        report = await enricher.run()

        assert report.to_dict() == {
            "message": "Enrichment completed",
            "completed": 2,
            "total": 2,
            "failed": [4],
        }


class TestPlaceholderProfileSource:

    @pytest.fixture
    def source(self):
        from connectltv.enrichment import PlaceholderProfileSource
        return PlaceholderProfileSource()

    @pytest.mark.asyncio
    async def test_personal_profile_url(self, source):
        text = await source.fetch("https://www.linkedin.com/in/janedoe/")

        assert text.startswith("About:\nPlaceholder profile for janedoe.")
        assert "Experience:\njanedoe is associated with Unknown Company." in text
        assert "Education:\n" in text

    @pytest.mark.asyncio
    async def test_company_url(self, source):
        text = await source.fetch("linkedin.com/company/acme-robotics")

        assert "Unknown User is associated with acme-robotics." in text

    @pytest.mark.asyncio
    async def test_empty_url_rejected(self, source):
        from connectltv.enrichment import ProfileSourceError

        with pytest.raises(ProfileSourceError):
            await source.fetch("  ")
