"""Crawl package — scope policy, classification, admission and alerts."""

from sitewatch.crawl.admission import AdmissionFilter
from sitewatch.crawl.alerts import Alert, AlertEmitter, AlertSource
from sitewatch.crawl.classifier import LinkClassifier, LinkDecision, classify_page
from sitewatch.crawl.keywords import KeywordLoadError, KeywordMatcher, KeywordSet, load_keywords
from sitewatch.crawl.policy import CrawlPolicy, KeywordSetName, PageClassification, PathRule
from sitewatch.crawl.runner import Crawler, CrawlResult
from sitewatch.crawl.scheduler import run_periodically
from sitewatch.crawl.scope import ScopeRegistry
from sitewatch.crawl.urls import normalize_url, resolve_url

__all__ = [
    "AdmissionFilter",
    "Alert",
    "AlertEmitter",
    "AlertSource",
    "CrawlPolicy",
    "CrawlResult",
    "Crawler",
    "KeywordLoadError",
    "KeywordMatcher",
    "KeywordSet",
    "KeywordSetName",
    "LinkClassifier",
    "LinkDecision",
    "PageClassification",
    "PathRule",
    "ScopeRegistry",
    "classify_page",
    "load_keywords",
    "normalize_url",
    "resolve_url",
    "run_periodically",
]
