"""Link and page classification.

Decisions are computed from the policy plus a read of the scope registry;
the only mutation is registering a marked anchor's target, which happens
under the registry lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from sitewatch.crawl.alerts import Alert, AlertEmitter, AlertSource
from sitewatch.crawl.keywords import KeywordMatcher
from sitewatch.crawl.policy import CrawlPolicy, KeywordSetName, PageClassification
from sitewatch.crawl.scope import ScopeRegistry
from sitewatch.crawl.urls import normalize_url, resolve_url, url_path
from sitewatch.scraper.models import Anchor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkDecision:
    url: Optional[str]
    classification: PageClassification
    follow: bool
    keyword_set: Optional[KeywordSetName] = None
    alert: Optional[Alert] = None


_DROP = LinkDecision(url=None, classification=PageClassification.OTHER, follow=False)


def classify_page(url: str, policy: CrawlPolicy, registry: ScopeRegistry) -> PageClassification:
    """Classify the normalized *url* of a request or fetched page.

    Registry membership wins over any path rule.
    """
    if registry.is_registered(url):
        return PageClassification.DERIVED
    if policy.is_homepage(url):
        return PageClassification.HOMEPAGE
    rule = policy.rule_for(url_path(url))
    if rule is not None:
        return rule.classification
    return PageClassification.OTHER


class LinkClassifier:
    def __init__(
        self,
        policy: CrawlPolicy,
        registry: ScopeRegistry,
        matcher: KeywordMatcher,
        emitter: AlertEmitter,
    ) -> None:
        self.policy = policy
        self.registry = registry
        self.matcher = matcher
        self.emitter = emitter

    def decide(
        self,
        anchor: Anchor,
        page_url: str,
        base_url: Optional[str] = None,
        page_classification: Optional[PageClassification] = None,
    ) -> LinkDecision:
        """Classify *anchor* found on the page at normalized *page_url*.

        Relative hrefs resolve against *base_url* (the post-redirect URL of
        the page) when given.  *page_classification* is the class the page
        was fetched as; when omitted it is looked up once from the registry.
        Does not touch the registry or emit anything; see :meth:`classify`.
        """
        if page_classification is None:
            page_classification = classify_page(page_url, self.policy, self.registry)
        if (
            self.policy.one_level_derivation
            and page_classification is PageClassification.DERIVED
        ):
            return _DROP

        absolute = resolve_url(base_url or page_url, anchor.href)
        if absolute is None:
            return _DROP
        url = normalize_url(absolute, self.policy.strip_query)

        if anchor.marked:
            classification = PageClassification.DERIVED
        else:
            rule = self.policy.rule_for(url_path(url))
            if rule is None:
                return LinkDecision(url=url, classification=PageClassification.OTHER, follow=False)
            classification = rule.classification

        return LinkDecision(
            url=url,
            classification=classification,
            follow=True,
            keyword_set=self.policy.keyword_set_for(classification),
        )

    def classify(
        self,
        anchor: Anchor,
        page_url: str,
        base_url: Optional[str] = None,
        page_classification: Optional[PageClassification] = None,
    ) -> LinkDecision:
        """Classify *anchor*, register derived targets and scan its text."""
        decision = self.decide(anchor, page_url, base_url, page_classification)
        if not decision.follow:
            return decision

        if decision.classification is PageClassification.DERIVED:
            if self.registry.register(decision.url):
                logger.debug("Registered derived scope %s (from %s)", decision.url, page_url)

        if decision.keyword_set is None:
            return decision
        found = self.matcher.match(anchor.text, decision.keyword_set)
        if not found:
            return decision

        alert = Alert.build(
            found,
            AlertSource.LINK_TEXT,
            decision.classification,
            decision.url,
            anchor.text,
        )
        self.emitter.emit(alert)
        return replace(decision, alert=alert)

