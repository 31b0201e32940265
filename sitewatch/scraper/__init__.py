"""Scraper package — web fetch & anchor extraction."""

from sitewatch.scraper.extractor import extract_anchors
from sitewatch.scraper.fetcher import fetch_url, make_client
from sitewatch.scraper.models import Anchor, RawPage

__all__ = ["fetch_url", "make_client", "extract_anchors", "RawPage", "Anchor"]
