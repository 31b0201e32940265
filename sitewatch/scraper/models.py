"""Data models for the scraper collaborator."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch.

    ``url`` is the URL that was requested; ``final_url`` is where redirects
    ended up and is the base for resolving relative links.
    """

    url: str
    html: str
    status_code: int
    final_url: str = ""

    @property
    def base_url(self) -> str:
        return self.final_url or self.url


@dataclass(frozen=True)
class Anchor:
    """One ``<a href>`` element found on a page."""

    href: str
    text: str
    marked: bool = False
