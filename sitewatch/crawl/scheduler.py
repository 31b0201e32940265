"""Fixed-interval scheduling of crawl runs."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from sitewatch.crawl.runner import CrawlResult

logger = logging.getLogger(__name__)


def run_periodically(
    run: Callable[[], CrawlResult],
    interval: float,
    max_runs: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
    on_result: Optional[Callable[[CrawlResult], None]] = None,
) -> int:
    """Call *run* immediately, then every *interval* seconds.

    Runs are independent and never overlap.  A run that takes longer than
    *interval* is followed immediately by the next one.  A failed result, or an
    exception escaping *run* or *on_result*, is logged and the loop carries on.

    Returns the number of runs performed (only reached when *max_runs* is set).
    """
    count = 0
    while max_runs is None or count < max_runs:
        started = clock()
        count += 1
        logger.info("Starting crawl run #%d", count)
        try:
            result = run()
        except Exception:
            logger.exception("Crawl run #%d raised", count)
        else:
            if not result.ok:
                logger.error("Crawl run #%d failed: %s", count, result.error)
            if on_result is not None:
                try:
                    on_result(result)
                except Exception:
                    logger.exception("Result handler for crawl run #%d raised", count)

        if max_runs is not None and count >= max_runs:
            break
        remaining = interval - (clock() - started)
        logger.info("Next run in %.0f seconds", max(0.0, remaining))
        if remaining > 0:
            sleep(remaining)
    return count
