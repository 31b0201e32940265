"""Anchor extraction: turns page HTML into a list of :class:`Anchor`."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

from sitewatch.scraper.models import Anchor


def _collapse(text: str) -> str:
    return " ".join(text.split())


def extract_anchors(html: str, marker_selector: str = "") -> List[Anchor]:
    """Return every ``<a href>`` on the page, in document order.

    An anchor is *marked* when it matches the CSS *marker_selector*.  An empty
    selector marks nothing.  Duplicate hrefs are kept: the same target can be
    reached through differently worded links, and each one is scanned.
    """
    soup = BeautifulSoup(html, "html.parser")

    marked_ids: set[int] = set()
    if marker_selector:
        marked_ids = {id(tag) for tag in soup.select(marker_selector)}

    anchors: List[Anchor] = []
    for tag in soup.find_all("a", href=True):
        anchors.append(
            Anchor(
                href=tag["href"].strip(),
                text=_collapse(tag.get_text(" ")),
                marked=id(tag) in marked_ids,
            )
        )
    return anchors
