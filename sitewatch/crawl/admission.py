"""Admission filter: decides, before dispatch, whether a request may proceed."""

from __future__ import annotations

import logging

from sitewatch.crawl.policy import CrawlPolicy
from sitewatch.crawl.scope import ScopeRegistry
from sitewatch.crawl.urls import url_host, url_path

logger = logging.getLogger(__name__)


class AdmissionFilter:
    def __init__(self, policy: CrawlPolicy, registry: ScopeRegistry) -> None:
        self.policy = policy
        self.registry = registry

    def admit(self, url: str) -> bool:
        """Return ``True`` if the normalized *url* may be fetched in this run.

        Off-site hosts are always rejected.  On-site, the homepage, any path
        matching a policy rule and any URL registered as derived scope are
        admitted.  Rejections are expected traffic and are only logged at
        DEBUG.
        """
        if not self.policy.domain_allowed(url_host(url)):
            logger.debug("Rejected off-site %s", url)
            return False
        if self.policy.is_homepage(url):
            return True
        if self.policy.rule_for(url_path(url)) is not None:
            return True
        if self.registry.is_registered(url):
            return True
        logger.debug("Rejected out-of-scope %s", url)
        return False
