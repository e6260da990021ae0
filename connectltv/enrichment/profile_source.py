"""
Profile Text Sources

Where biography text for the enrichment job comes from.
Each source must implement fetch(linkedin_url) -> str.
"""

from abc import ABC, abstractmethod
from urllib.parse import urlparse


class ProfileSourceError(Exception):
    """A source could not produce text for one profile."""
    pass


class ProfileTextSource(ABC):
    """Abstract base class for biography text sources"""

    name: str = "source"

    @abstractmethod
    async def fetch(self, linkedin_url: str) -> str:
        """
        Produce biography text for one profile.

        Raises:
            ProfileSourceError: If no text can be produced for this URL
        """
        pass


def _path_segment_after(path: str, marker: str) -> str:
    parts = [part for part in path.split("/") if part]
    for index, part in enumerate(parts[:-1]):
        if part == marker:
            return parts[index + 1]
    return ""


class PlaceholderProfileSource(ProfileTextSource):
    """
    Builds clearly-labelled placeholder text from the URL alone.

    Real LinkedIn pages need authenticated browser automation, which this
    job does not do; the placeholder keeps the pipeline exercisable end to end.
    """

    name = "placeholder"

    async def fetch(self, linkedin_url: str) -> str:
        url = (linkedin_url or "").strip()
        if not url:
            raise ProfileSourceError("Empty LinkedIn URL")

        path = urlparse(url if "://" in url else f"https://{url}").path
        username = _path_segment_after(path, "in") or "Unknown User"
        company = _path_segment_after(path, "company") or "Unknown Company"

        return "\n\n".join([
            "About:\n"
            f"Placeholder profile for {username}. Profile pages were not fetched; "
            "this text only marks the record as processed.",
            "Experience:\n"
            f"{username} is associated with {company}. Replace this with data from "
            "an authorized profile source.",
            "Education:\n"
            f"Education history for {username} is not available in placeholder mode.",
        ])
