"""Tests for keyword file loading and the keyword matcher."""

from __future__ import annotations

from pathlib import Path

import pytest

from sitewatch.crawl.keywords import (
    KeywordLoadError,
    KeywordMatcher,
    KeywordSet,
    load_keywords,
)
from sitewatch.crawl.policy import KeywordSetName

NEWS = KeywordSetName.NEWS
MATCH = KeywordSetName.MATCH


def _matcher(news=(), match=()) -> KeywordMatcher:
    return KeywordMatcher([
        KeywordSet.from_lines(NEWS, news),
        KeywordSet.from_lines(MATCH, match),
    ])


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoadKeywords:
    def test_parses_file(self, tmp_path: Path) -> None:
        path = tmp_path / "keywords-news.txt"
        path.write_text(
            "# comment line\n"
            "\n"
            "  Ban  \n"
            "   # indented comment\n"
            "Cheating\n"
            "ban\n",
            encoding="utf-8",
        )
        keyword_set = load_keywords(NEWS, path)
        assert keyword_set.name is NEWS
        assert keyword_set.keywords == ("ban", "cheating")

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        keyword_set = load_keywords(MATCH, tmp_path / "nope.txt")
        assert len(keyword_set) == 0

    def test_unreadable_file_raises(self, tmp_path: Path) -> None:
        directory = tmp_path / "keywords-news.txt"
        directory.mkdir()
        with pytest.raises(KeywordLoadError):
            load_keywords(NEWS, directory)

    def test_undecodable_file_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "keywords-news.txt"
        path.write_bytes(b"\xff\xfe\xfa ban\n")
        with pytest.raises(KeywordLoadError):
            load_keywords(NEWS, path)

    def test_permission_error_raises_load_error(self, tmp_path: Path, monkeypatch) -> None:
        path = tmp_path / "keywords-news.txt"
        path.write_text("ban\n", encoding="utf-8")

        def denied(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_text", denied)
        with pytest.raises(KeywordLoadError):
            load_keywords(NEWS, path)

    def test_logs_keyword_count(self, tmp_path: Path, caplog) -> None:
        path = tmp_path / "keywords-matches.txt"
        path.write_text("forfeit\nstand-in\n", encoding="utf-8")
        with caplog.at_level("INFO", logger="sitewatch.crawl.keywords"):
            load_keywords(MATCH, path)
        assert "Loaded 2 keywords" in caplog.text

    def test_from_files_loads_both_sets(self, tmp_path: Path) -> None:
        news = tmp_path / "news.txt"
        news.write_text("ban\n", encoding="utf-8")
        matcher = KeywordMatcher.from_files(news, tmp_path / "missing.txt")
        assert matcher.keyword_set(NEWS).keywords == ("ban",)
        assert matcher.keyword_set(MATCH).keywords == ()


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestKeywordMatcher:
    def test_case_insensitive(self) -> None:
        assert _matcher(news=["ban"]).match("BAN announced", NEWS) == ["ban"]

    def test_substring_not_word_bounded(self) -> None:
        assert _matcher(news=["ban"]).match("Banned for a year", NEWS) == ["ban"]

    def test_multiple_keywords(self) -> None:
        found = _matcher(news=["ban", "vac", "roster"]).match("VAC ban issued", NEWS)
        assert sorted(found) == ["ban", "vac"]

    def test_uses_selected_set_only(self) -> None:
        matcher = _matcher(news=["ban"], match=["forfeit"])
        assert matcher.match("ban and forfeit", NEWS) == ["ban"]
        assert matcher.match("ban and forfeit", MATCH) == ["forfeit"]

    def test_empty_text(self) -> None:
        assert _matcher(news=["ban"]).match("", NEWS) == []

    def test_empty_set(self) -> None:
        assert _matcher().match("ban everything", NEWS) == []

    def test_unknown_set_is_empty(self) -> None:
        matcher = KeywordMatcher([KeywordSet.from_lines(NEWS, ["ban"])])
        assert matcher.match("ban", MATCH) == []

