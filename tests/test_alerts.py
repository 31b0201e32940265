"""Tests for alert records and the alert emitter."""

from __future__ import annotations

import logging

from sitewatch.crawl.alerts import Alert, AlertEmitter, AlertSource, body_snippet
from sitewatch.crawl.policy import PageClassification


def _alert(**overrides) -> Alert:
    values = dict(
        keywords=["vac", "ban", "vac"],
        source=AlertSource.LINK_TEXT,
        classification=PageClassification.NEWS,
        url="https://www.example.com/news/1",
        snippet="VAC Ban issued",
    )
    values.update(overrides)
    return Alert.build(**values)


class TestAlert:
    def test_keywords_are_sorted_and_unique(self) -> None:
        assert _alert().keywords == ("ban", "vac")

    def test_format_contains_all_fields(self) -> None:
        line = _alert().format()
        assert line == (
            "ALERT keywords=[ban, vac] source=link-text classification=news "
            "url=https://www.example.com/news/1 text='VAC Ban issued'"
        )


class TestAlertEmitter:
    def test_logs_at_warning(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="sitewatch.alerts"):
            AlertEmitter().emit(_alert())
        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == logging.WARNING
        assert "keywords=[ban, vac]" in caplog.text

    def test_forwards_to_sinks(self) -> None:
        seen = []
        emitter = AlertEmitter([seen.append, seen.append])
        alert = _alert()
        emitter.emit(alert)
        assert seen == [alert, alert]

    def test_failing_sink_does_not_raise(self) -> None:
        seen = []

        def broken(alert: Alert) -> None:
            raise RuntimeError("sink down")

        emitter = AlertEmitter([broken, seen.append])
        emitter.emit(_alert())
        assert len(seen) == 1

    def test_unformattable_alert_does_not_raise(self) -> None:
        AlertEmitter().emit(object())


class TestBodySnippet:
    def test_window_around_keyword(self) -> None:
        text = "x" * 200 + " the BAN was lifted " + "y" * 200
        snippet = body_snippet(text, "ban")
        assert "the BAN was lifted" in snippet
        assert len(snippet) < 200

    def test_missing_keyword(self) -> None:
        assert body_snippet("nothing here", "ban") == ""
