"""
Enrichment - Out-of-band biography text for profiles

- ProfileEnricher: Batch job over unenriched profiles
- ProfileTextSource: Where biography text comes from
- PlaceholderProfileSource: URL-derived placeholder text
"""

from .enricher import ProfileEnricher, EnrichmentReport
from .profile_source import ProfileTextSource, PlaceholderProfileSource, ProfileSourceError

__all__ = [
    "ProfileEnricher",
    "EnrichmentReport",
    "ProfileTextSource",
    "PlaceholderProfileSource",
    "ProfileSourceError",
]
