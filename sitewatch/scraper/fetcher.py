"""HTTP fetcher used by the crawl runner."""

from __future__ import annotations

import httpx

from sitewatch.config import settings
from sitewatch.scraper.models import RawPage


def _default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }


def make_client() -> httpx.Client:
    """Return an ``httpx.Client`` configured for one crawl run.

    The client is safe to share between the runner's worker threads; the
    caller owns it and must close it when the run ends.
    """
    return httpx.Client(
        headers=_default_headers(),
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


def fetch_url(url: str, client: httpx.Client | None = None) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Uses *client* when given, otherwise a short-lived client is opened for
    this single request.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.TransportError: On connection failures and timeouts.
    """
    if client is None:
        with make_client() as own:
            return fetch_url(url, own)

    response = client.get(url)
    response.raise_for_status()
    return RawPage(
        url=url,
        html=response.text,
        status_code=response.status_code,
        final_url=str(response.url),
    )
