"""Crawl scope policy: page classifications and the rule table.

The policy is declarative: an ordered list of path-prefix rules, each
mapping to a classification and the keyword set scanned for it, plus the
keyword set used for marker-derived pages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from sitewatch.config import Settings
from sitewatch.crawl.urls import normalize_url, url_path

_ROOT_PATHS = ("", "/")


class PageClassification(str, enum.Enum):
    HOMEPAGE = "homepage"
    NEWS = "news"
    MATCHES = "matches"
    DERIVED = "derived"
    OTHER = "other"


class KeywordSetName(str, enum.Enum):
    NEWS = "news"
    MATCH = "match"


@dataclass(frozen=True)
class PathRule:
    """Requests whose path starts with *prefix* are in scope as *classification*."""

    prefix: str
    classification: PageClassification
    keyword_set: Optional[KeywordSetName]

    def matches(self, path: str) -> bool:
        return path.startswith(self.prefix)


@dataclass(frozen=True)
class CrawlPolicy:
    homepage: str
    rules: tuple[PathRule, ...]
    allowed_domains: tuple[str, ...] = ()
    marker_selector: str = ""
    derived_keyword_set: Optional[KeywordSetName] = KeywordSetName.MATCH
    # Pages reached through a marked anchor contribute no further links.
    one_level_derivation: bool = True
    strip_query: bool = False

    @classmethod
    def from_settings(cls, cfg: Settings) -> "CrawlPolicy":
        matches_keywords = KeywordSetName.MATCH if cfg.scan_matches_path else None
        return cls(
            homepage=cfg.homepage,
            rules=(
                PathRule(cfg.news_prefix, PageClassification.NEWS, KeywordSetName.NEWS),
                PathRule(cfg.matches_prefix, PageClassification.MATCHES, matches_keywords),
            ),
            allowed_domains=tuple(cfg.effective_domains),
            marker_selector=cfg.marker_selector,
            strip_query=cfg.strip_query,
        )

    def rule_for(self, path: str) -> Optional[PathRule]:
        for rule in self.rules:
            if rule.matches(path):
                return rule
        return None

    def is_homepage(self, url: str) -> bool:
        """True for the configured homepage and for the site root."""
        if url_path(url) in _ROOT_PATHS:
            return True
        return url == normalize_url(self.homepage, self.strip_query)

    def domain_allowed(self, host: str) -> bool:
        if not self.allowed_domains:
            return True
        return host.lower() in self.allowed_domains

    def keyword_set_for(self, classification: PageClassification) -> Optional[KeywordSetName]:
        """Keyword set scanned for *classification*, or ``None`` for no scan."""
        if classification is PageClassification.DERIVED:
            return self.derived_keyword_set
        for rule in self.rules:
            if rule.classification is classification:
                return rule.keyword_set
        return None
