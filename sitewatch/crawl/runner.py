"""Crawl run orchestrator.

``Crawler.run_once`` performs one full traversal from the homepage.  Every
call builds a fresh :class:`ScopeRegistry` and de-duplication set, so no
state crosses the run boundary and overlapping runs stay isolated.

Requests are fetched on a ``ThreadPoolExecutor``; link discovery feeds new
requests back into the pool until the frontier is empty.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from contextlib import ExitStack
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, Iterable, Optional

import httpx

from sitewatch.config import Settings
from sitewatch.crawl.admission import AdmissionFilter
from sitewatch.crawl.alerts import Alert, AlertEmitter, AlertSink, AlertSource, body_snippet
from sitewatch.crawl.classifier import LinkClassifier, classify_page
from sitewatch.crawl.keywords import KeywordMatcher
from sitewatch.crawl.policy import CrawlPolicy, PageClassification
from sitewatch.crawl.scope import ScopeRegistry
from sitewatch.crawl.urls import normalize_url
from sitewatch.scraper.extractor import extract_anchors
from sitewatch.scraper.fetcher import fetch_url, make_client
from sitewatch.scraper.models import RawPage

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], RawPage]


@dataclass
class CrawlResult:
    """Outcome of one crawl run.  ``alerts`` lives only as long as the result."""

    ok: bool = True
    error: Optional[str] = None
    admitted: int = 0
    rejected: int = 0
    fetched: int = 0
    failed: int = 0
    alerts: list[Alert] = field(default_factory=list)
    duration: float = 0.0

    def summary(self) -> str:
        status = "ok" if self.ok else f"failed ({self.error})"
        return (
            f"{status}: admitted={self.admitted} rejected={self.rejected} "
            f"fetched={self.fetched} failed={self.failed} alerts={len(self.alerts)} "
            f"in {self.duration:.1f}s"
        )


class Crawler:
    def __init__(
        self,
        policy: CrawlPolicy,
        matcher: KeywordMatcher,
        fetch: Optional[Fetcher] = None,
        sinks: Optional[Iterable[AlertSink]] = None,
        concurrency: int = 4,
    ) -> None:
        self.policy = policy
        self.matcher = matcher
        self.fetch = fetch
        self.sinks = list(sinks or [])
        self.concurrency = max(1, concurrency)

    @classmethod
    def from_settings(
        cls,
        cfg: Settings,
        matcher: KeywordMatcher,
        fetch: Optional[Fetcher] = None,
        sinks: Optional[Iterable[AlertSink]] = None,
    ) -> "Crawler":
        return cls(
            CrawlPolicy.from_settings(cfg),
            matcher,
            fetch=fetch,
            sinks=sinks,
            concurrency=cfg.crawl_concurrency,
        )

    def run_once(self) -> CrawlResult:
        """Run one complete traversal and return its result.

        Transport errors never escape: a failed homepage makes the result
        ``ok=False``, any other failed request is only counted.
        """
        return _CrawlRun(self).execute()


class _CrawlRun:
    """State for a single run; discarded when the run ends."""

    def __init__(self, crawler: Crawler) -> None:
        self.policy = crawler.policy
        self.matcher = crawler.matcher
        self.concurrency = crawler.concurrency
        self.fetch = crawler.fetch
        self.result = CrawlResult()
        self.registry = ScopeRegistry()
        self.emitter = AlertEmitter([*crawler.sinks, self.result.alerts.append])
        self.admission = AdmissionFilter(self.policy, self.registry)
        self.classifier = LinkClassifier(self.policy, self.registry, self.matcher, self.emitter)
        self.homepage = normalize_url(self.policy.homepage, self.policy.strip_query)
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _claim(self, url: str) -> bool:
        with self._lock:
            if url in self._seen:
                return False
            self._seen.add(url)
            return True

    def _count(self, name: str) -> None:
        with self._lock:
            setattr(self.result, name, getattr(self.result, name) + 1)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def execute(self) -> CrawlResult:
        started = time.monotonic()
        logger.info("Starting crawl run from %s", self.homepage)

        with ExitStack() as stack:
            fetch = self.fetch
            if fetch is None:
                client = stack.enter_context(make_client())
                fetch = partial(fetch_url, client=client)
            pool = stack.enter_context(
                ThreadPoolExecutor(max_workers=self.concurrency, thread_name_prefix="crawl")
            )
            self._traverse(pool, fetch)

        self.result.duration = time.monotonic() - started
        logger.info(
            "Crawl run finished: %s (%d derived URLs)", self.result.summary(), len(self.registry)
        )
        return self.result

    def _traverse(self, pool: ThreadPoolExecutor, fetch: Fetcher) -> None:
        pending: dict[Future, str] = {}

        def submit(url: str) -> None:
            if self._claim(url):
                pending[pool.submit(self._visit, url, fetch)] = url

        submit(self.homepage)
        while pending:
            done, _ = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                url = pending.pop(future)
                try:
                    links = future.result()
                except httpx.HTTPError as exc:
                    self._failed(url, exc)
                    continue
                except Exception as exc:
                    logger.exception("Unexpected error while processing %s", url)
                    self._failed(url, exc)
                    continue
                if links is None and url == self.homepage:
                    self.result.ok = False
                    self.result.error = f"homepage {url} rejected by admission"
                for link in links or ():
                    submit(link)

    def _failed(self, url: str, exc: Exception) -> None:
        self._count("failed")
        logger.warning("Something went wrong fetching %s: %s", url, exc)
        if url == self.homepage:
            self.result.ok = False
            self.result.error = f"homepage unreachable: {exc}"

    # ------------------------------------------------------------------
    # One request: Discovered → Admitted|Rejected → Fetched → LinksExtracted
    # ------------------------------------------------------------------

    def _visit(self, url: str, fetch: Fetcher) -> Optional[list[str]]:
        """Process one request; ``None`` means admission rejected it."""
        if not self.admission.admit(url):
            self._count("rejected")
            return None
        self._count("admitted")
        # Classified once, at admission: registrations made later in the run
        # must not change how this page's links are treated.
        classification = classify_page(url, self.policy, self.registry)
        logger.debug("Visiting %s page %s", classification.value, url)

        page = fetch(url)
        self._count("fetched")

        self._scan_body(url, page, classification)

        links: list[str] = []
        for anchor in extract_anchors(page.html, self.policy.marker_selector):
            decision = self.classifier.classify(anchor, url, page.base_url, classification)
            if decision.follow and decision.url is not None:
                links.append(decision.url)
        return links

    def _scan_body(self, url: str, page: RawPage, classification: PageClassification) -> None:
        keyword_set = self.policy.keyword_set_for(classification)
        if keyword_set is None:
            return
        logger.info(
            "Scanning %s page %s (status %d)", classification.value, url, page.status_code
        )
        found = self.matcher.match(page.html, keyword_set)
        if not found:
            return
        alert = Alert.build(
            found,
            AlertSource.PAGE_BODY,
            classification,
            url,
            body_snippet(page.html, sorted(found)[0]),
        )
        self.emitter.emit(alert)
