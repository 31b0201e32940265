"""sitewatch CLI — entry-point for crawl operations.

Usage:
    python cli/main.py --help

Commands:
    run       → one crawl run from the homepage
    watch     → crawl now, then on a fixed interval
    keywords  → show the loaded keyword sets
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitewatch.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from dataclasses import replace
from typing import Optional

import typer

from sitewatch.config import Settings, settings
from sitewatch.crawl import Crawler, CrawlResult, KeywordLoadError, KeywordMatcher, KeywordSetName
from sitewatch.crawl.scheduler import run_periodically

app = typer.Typer(
    name="sitewatch",
    help="Scoped site crawler with keyword alerts.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _effective_settings(homepage: Optional[str], concurrency: Optional[int]) -> Settings:
    cfg = settings
    if homepage:
        cfg = replace(cfg, homepage=homepage)
    if concurrency:
        cfg = replace(cfg, crawl_concurrency=concurrency)
    return cfg


def _load_matcher(cfg: Settings) -> KeywordMatcher:
    """Load both keyword sets or exit: a run never starts without them."""
    try:
        return KeywordMatcher.from_files(cfg.news_keywords_file, cfg.match_keywords_file)
    except KeywordLoadError as exc:
        typer.echo(f"[keywords] Failed to load keywords: {exc}", err=True)
        raise typer.Exit(1)


def _echo_result(tag: str, result: CrawlResult) -> None:
    typer.echo(f"[{tag}] {result.summary()}")
    for alert in result.alerts:
        typer.echo(f"[{tag}] 🔔 {alert.format()}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("run")
def run(
    homepage: Optional[str] = typer.Option(None, help="Override the crawl homepage."),
    concurrency: Optional[int] = typer.Option(None, help="Worker threads for fetching."),
) -> None:
    """Crawl once from the homepage and report alerts."""
    cfg = _effective_settings(homepage, concurrency)
    _configure_logging(cfg.log_level)
    matcher = _load_matcher(cfg)

    typer.echo(f"[run] Crawling from {cfg.homepage!r} …")
    result = Crawler.from_settings(cfg, matcher).run_once()
    _echo_result("run", result)
    if not result.ok:
        raise typer.Exit(1)


@app.command("watch")
def watch(
    interval: Optional[float] = typer.Option(None, help="Seconds between run starts."),
    max_runs: Optional[int] = typer.Option(None, "--max-runs", help="Stop after this many runs."),
    homepage: Optional[str] = typer.Option(None, help="Override the crawl homepage."),
    concurrency: Optional[int] = typer.Option(None, help="Worker threads for fetching."),
) -> None:
    """Crawl immediately, then again every INTERVAL seconds."""
    cfg = _effective_settings(homepage, concurrency)
    _configure_logging(cfg.log_level)
    matcher = _load_matcher(cfg)
    every = interval if interval is not None else cfg.crawl_interval

    crawler = Crawler.from_settings(cfg, matcher)
    typer.echo(f"[watch] Crawling {cfg.homepage!r} every {every:.0f}s …")
    runs = run_periodically(
        crawler.run_once,
        every,
        max_runs=max_runs,
        on_result=lambda result: _echo_result("watch", result),
    )
    typer.echo(f"[watch] Stopped after {runs} run(s).")


@app.command("keywords")
def keywords() -> None:
    """List the keywords loaded for each set."""
    matcher = _load_matcher(settings)
    for name, path in (
        (KeywordSetName.NEWS, settings.news_keywords_file),
        (KeywordSetName.MATCH, settings.match_keywords_file),
    ):
        keyword_set = matcher.keyword_set(name)
        typer.echo(f"[keywords] {name.value} ({path}): {len(keyword_set)} keyword(s)")
        for kw in keyword_set:
            typer.echo(f"  {kw}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
