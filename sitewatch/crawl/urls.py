"""URL resolution and normalization.

A normalized URL is the only key used for scope membership and in-run
de-duplication.  Normalization drops the fragment (and, optionally, the
query string) and leaves everything else, including case, untouched.
"""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit, urlunsplit

_FOLLOWABLE_SCHEMES = ("http", "https")


def normalize_url(url: str, strip_query: bool = False) -> str:
    """Return the canonical form of the absolute *url*.

    Idempotent: ``normalize_url(normalize_url(u)) == normalize_url(u)``.
    """
    parts = urlsplit(url)
    query = "" if strip_query else parts.query
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def resolve_url(base: str, href: str) -> str | None:
    """Resolve *href* against the page URL *base*.

    Returns ``None`` for hrefs that cannot become a crawlable URL: empty or
    fragment-only values, unparsable URLs, and non-HTTP schemes such as
    ``mailto:`` or ``javascript:``.
    """
    href = (href or "").strip()
    if not href or href.startswith("#"):
        return None
    try:
        absolute = urljoin(base, href)
        parts = urlsplit(absolute)
        # Accessing .port validates the netloc (raises on e.g. "host:abc").
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in _FOLLOWABLE_SCHEMES or not parts.netloc:
        return None
    return absolute


def url_path(url: str) -> str:
    return urlsplit(url).path


def url_host(url: str) -> str:
    return (urlsplit(url).hostname or "").lower()
