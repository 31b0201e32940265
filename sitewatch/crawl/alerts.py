"""Keyword alerts and the emitter that logs them."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from sitewatch.crawl.policy import PageClassification

logger = logging.getLogger("sitewatch.alerts")

_SNIPPET_RADIUS = 60


class AlertSource(str, enum.Enum):
    LINK_TEXT = "link-text"
    PAGE_BODY = "page-body"


@dataclass(frozen=True)
class Alert:
    keywords: tuple[str, ...]
    source: AlertSource
    classification: PageClassification
    url: str
    snippet: str

    @classmethod
    def build(
        cls,
        keywords: Iterable[str],
        source: AlertSource,
        classification: PageClassification,
        url: str,
        snippet: str,
    ) -> "Alert":
        return cls(
            keywords=tuple(sorted(set(keywords))),
            source=source,
            classification=classification,
            url=url,
            snippet=snippet,
        )

    def format(self) -> str:
        return (
            f"ALERT keywords=[{', '.join(self.keywords)}] source={self.source.value} "
            f"classification={self.classification.value} url={self.url} text={self.snippet!r}"
        )


def body_snippet(text: str, keyword: str) -> str:
    """Return the text around the first occurrence of *keyword*, whitespace-collapsed."""
    idx = text.lower().find(keyword.lower())
    if idx < 0:
        return ""
    start = max(0, idx - _SNIPPET_RADIUS)
    end = idx + len(keyword) + _SNIPPET_RADIUS
    return " ".join(text[start:end].split())


AlertSink = Callable[[Alert], None]


class AlertEmitter:
    """Logs alerts and forwards them to optional sinks.

    ``emit`` never raises: a broken sink or log handler must not stop a crawl.
    """

    def __init__(self, sinks: Optional[Iterable[AlertSink]] = None) -> None:
        self._sinks: list[AlertSink] = list(sinks or [])

    def emit(self, alert: Alert) -> None:
        try:
            logger.warning(alert.format())
        except Exception:
            logger.debug("Failed to log alert for %s", getattr(alert, "url", "?"), exc_info=True)
        for sink in self._sinks:
            try:
                sink(alert)
            except Exception:
                logger.debug("Alert sink %r failed", sink, exc_info=True)
