"""Centralised settings for sitewatch.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlsplit

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_list(name: str) -> list[str]:
    raw = os.environ.get(name, "")
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Crawl target
    # ------------------------------------------------------------------
    homepage: str = field(
        default_factory=lambda: os.environ.get("SITEWATCH_HOMEPAGE", "https://www.hltv.org/")
    )
    allowed_domains: list[str] = field(
        default_factory=lambda: _env_list("SITEWATCH_ALLOWED_DOMAINS")
    )

    # ------------------------------------------------------------------
    # Scope policy
    # ------------------------------------------------------------------
    news_prefix: str = field(
        default_factory=lambda: os.environ.get("SITEWATCH_NEWS_PREFIX", "/news")
    )
    matches_prefix: str = field(
        default_factory=lambda: os.environ.get("SITEWATCH_MATCHES_PREFIX", "/matches")
    )
    marker_selector: str = field(
        default_factory=lambda: os.environ.get("SITEWATCH_MARKER_SELECTOR", "a.match")
    )
    scan_matches_path: bool = field(
        default_factory=lambda: _env_bool("SITEWATCH_SCAN_MATCHES_PATH", True)
    )
    strip_query: bool = field(
        default_factory=lambda: _env_bool("SITEWATCH_STRIP_QUERY", False)
    )

    # ------------------------------------------------------------------
    # Keyword lists
    # ------------------------------------------------------------------
    news_keywords_file: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SITEWATCH_NEWS_KEYWORDS", "keywords-news.txt")
        )
    )
    match_keywords_file: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SITEWATCH_MATCH_KEYWORDS", "keywords-matches.txt")
        )
    )

    # ------------------------------------------------------------------
    # Scheduling / fetching
    # ------------------------------------------------------------------
    crawl_interval: float = field(
        default_factory=lambda: float(os.environ.get("SITEWATCH_CRAWL_INTERVAL", "1800"))
    )
    crawl_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("SITEWATCH_CRAWL_CONCURRENCY", "4"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "SITEWATCH_USER_AGENT",
            "Mozilla/5.0 (compatible; sitewatch/1.0; +https://github.com/sitewatch)",
        )
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("SITEWATCH_LOG_LEVEL", "INFO").upper()
    )

    @property
    def effective_domains(self) -> list[str]:
        """Hosts the crawl may touch.

        Falls back to the homepage host and its ``www.`` twin when no explicit
        list is configured.
        """
        if self.allowed_domains:
            return list(self.allowed_domains)
        host = (urlsplit(self.homepage).hostname or "").lower()
        if not host:
            return []
        twin = host[4:] if host.startswith("www.") else f"www.{host}"
        return [host, twin]


# Module-level singleton — import this everywhere:
#   from sitewatch.config import settings
settings = Settings()
