"""Shared fixtures for directory tests."""

import pytest

from connectltv.tests.rows import make_row


@pytest.fixture
def alumni_rows():
    return [
        make_row(1, "Jane", "Doe", "CEO", "EduGrowth", "Austin, TX",
                 email="jane@edugrowth.com", linkedin="https://www.linkedin.com/in/janedoe/"),
        make_row(2, "Austin", "Lee", "Head of Product", "Paylane", "Boston, MA",
                 function="Product", stage="Series A", comments="Built two fintech products."),
        make_row(3, "Priya", "Shah", "VP Sales", "Cloudnine", "London",
                 function="Sales", stage="Growth", linkedin="https://linkedin.com/in/priyashah",
                 scrape="About:\nAlready enriched."),
        make_row(4, "Marco", None, "CTO", None, "Milan", comments=None,
                 linkedin="https://www.linkedin.com/company/acme-robotics/"),
    ]


@pytest.fixture
def memory_store(alumni_rows):
    from connectltv.common.memory_store import InMemoryRecordStore
    return InMemoryRecordStore(alumni_rows)
