"""Keyword lists and the case-insensitive keyword matcher.

Keyword files hold one keyword per line.  Blank lines and lines whose first
non-space character is ``#`` are ignored; everything else is trimmed and
lowercased.  A missing file simply yields an empty set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from sitewatch.crawl.policy import KeywordSetName

logger = logging.getLogger(__name__)


class KeywordLoadError(OSError):
    """A keyword file exists but could not be read."""


@dataclass(frozen=True)
class KeywordSet:
    """An immutable, ordered, de-duplicated collection of lowercase keywords."""

    name: KeywordSetName
    keywords: tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, name: KeywordSetName, lines: Iterable[str]) -> "KeywordSet":
        seen: dict[str, None] = {}
        for line in lines:
            keyword = line.strip()
            if not keyword or keyword.startswith("#"):
                continue
            seen.setdefault(keyword.lower(), None)
        return cls(name=name, keywords=tuple(seen))

    def __len__(self) -> int:
        return len(self.keywords)

    def __iter__(self):
        return iter(self.keywords)


def load_keywords(name: KeywordSetName, path: Path | str) -> KeywordSet:
    """Load the keyword set *name* from *path*.

    Raises:
        KeywordLoadError: If *path* exists but cannot be read or decoded.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("Keyword file %s not found; %s set is empty", path, name.value)
        return KeywordSet(name=name)
    except (OSError, UnicodeDecodeError) as exc:
        raise KeywordLoadError(f"error reading {path}: {exc}") from exc

    keyword_set = KeywordSet.from_lines(name, text.splitlines())
    logger.info("Loaded %d keywords from %s", len(keyword_set), path)
    return keyword_set


class KeywordMatcher:
    """Reports which keywords of a named set occur in a piece of text.

    The sets are read-only once built, so one matcher can be shared by every
    worker thread of a run without locking.
    """

    def __init__(self, sets: Iterable[KeywordSet]):
        self._sets: dict[KeywordSetName, KeywordSet] = {s.name: s for s in sets}

    @classmethod
    def from_files(cls, news_path: Path | str, match_path: Path | str) -> "KeywordMatcher":
        return cls([
            load_keywords(KeywordSetName.NEWS, news_path),
            load_keywords(KeywordSetName.MATCH, match_path),
        ])

    def keyword_set(self, name: KeywordSetName) -> KeywordSet:
        return self._sets.get(name) or KeywordSet(name=name)

    def match(self, text: str, name: KeywordSetName) -> list[str]:
        """Return the keywords of set *name* found as substrings of *text*.

        Matching is case-insensitive and not word-bounded.  Results follow
        the set's own order; callers that need sorted output sort it.
        """
        if not text:
            return []
        lowered = text.lower()
        return [kw for kw in self.keyword_set(name) if kw in lowered]
