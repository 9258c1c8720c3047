"""Command-line helper that runs one search through the NewsSense pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from rich.console import Console
from rich.table import Table

from newsense.config import configure_logging, load_config
from newsense.errors import ConfigurationError
from newsense.models import REGIONS, SearchRequest
from newsense.service import NewsAnalysisService


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the NewsSense pipeline for one query")
    parser.add_argument("query", nargs="?", default="latest", help="Search keywords (default: latest)")
    parser.add_argument("--category", default="general")
    parser.add_argument("--region", choices=REGIONS, default="global")
    parser.add_argument("--language", default="en")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    console = Console()
    service = NewsAnalysisService(load_config())
    request = SearchRequest(
        query=args.query,
        category=args.category,
        region=args.region,
        language=args.language,
    )
    try:
        outcome = service.analyze(request)
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        return 1
    finally:
        service.close()

    if outcome.message:
        console.print(f"[yellow]{outcome.message}[/yellow]")
    if not outcome.articles:
        return 0

    table = Table(title=f"{len(outcome.articles)} articles via {outcome.provider or 'sample data'}")
    table.add_column("Credibility", justify="right")
    table.add_column("Title")
    table.add_column("Source")
    table.add_column("Summary")
    for article in outcome.articles:
        source = article.sources[0]["name"] if article.sources else ""
        table.add_row(str(article.credibility), article.title, source, article.summary)
    console.print(table)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
