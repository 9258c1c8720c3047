"""Core news analysis service: fetch, enrich, analyze and assemble."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

import httpx

from .analyzer import ArticleAnalyzer
from .config import AppConfig
from .enrichment import ContentEnricher
from .fetching import NewsFetcher
from .models import AnalysisOutcome, AnalysisResult, Article, OutputArticle, SearchRequest
from .providers import ProviderSelector

LOGGER = logging.getLogger(__name__)

PLACEHOLDER_MESSAGE = "Using sample data - please configure a news API key for real news"
PLACEHOLDER_SUMMARY = (
    "This is a sample article to demonstrate the functionality. Please configure a valid "
    "GNews or NewsAPI key to get real news data."
)
PLACEHOLDER_CREDIBILITY = 75
PLACEHOLDER_SOURCE = {"name": "NewsSense AI", "url": "https://newsense-ai.com"}


def placeholder_article(category: str) -> OutputArticle:
    return OutputArticle(
        title="Sample News Article",
        content=PLACEHOLDER_SUMMARY,
        summary=PLACEHOLDER_SUMMARY,
        credibility=PLACEHOLDER_CREDIBILITY,
        sources=[dict(PLACEHOLDER_SOURCE)],
        category=category,
        published_at=datetime.now(timezone.utc).isoformat(),
    )


def assemble(
    analyzed: Sequence[Tuple[Article, AnalysisResult]],
    category: str,
) -> List[OutputArticle]:
    """Map analyzed articles to client records, keeping their order."""

    output: List[OutputArticle] = []
    for article, result in analyzed:
        output.append(
            OutputArticle(
                title=article.title,
                content=article.content or article.description or "",
                summary=result.summary,
                credibility=result.credibility,
                sources=[{"name": article.source_name, "url": article.url}],
                category=category,
                published_at=article.published_at,
            )
        )
    return output


class NewsAnalysisService:
    """Run the news pipeline for one search request at a time."""

    def __init__(self, config: AppConfig, http_client: Optional[httpx.Client] = None) -> None:
        self.config = config
        self._owns_client = http_client is None
        self._http_client = http_client or httpx.Client(timeout=config.fetcher.timeout)
        self.selector = ProviderSelector(config.credentials, self._http_client, config.fetcher)
        self.fetcher = NewsFetcher(self.selector)
        self.enricher = ContentEnricher(config.enricher, self._http_client)
        self.analyzer = ArticleAnalyzer(config.analyzer, self._http_client)

    @property
    def provider_names(self) -> List[str]:
        return self.selector.provider_names

    def close(self) -> None:
        if self._owns_client:
            self._http_client.close()

    def analyze(self, request: SearchRequest) -> AnalysisOutcome:
        """Run the full pipeline; raises ``ConfigurationError`` without a Gemini key."""

        self.analyzer.ensure_configured()

        if not self.selector.configured:
            LOGGER.warning("No news provider configured; returning sample data")
            return AnalysisOutcome(
                articles=[placeholder_article(request.category)],
                message=PLACEHOLDER_MESSAGE,
            )

        LOGGER.info(
            'Fetching news for query: "%s", category: "%s", region: %s',
            request.query,
            request.category,
            request.region,
        )
        fetched = self.fetcher.fetch(request)
        if not fetched.articles:
            return AnalysisOutcome(articles=[], message=fetched.message)

        enriched = self.enricher.enrich(fetched.articles)
        analyzed = self.analyzer.analyze(enriched)
        articles = assemble(analyzed, request.category)
        LOGGER.info("Successfully processed %d articles", len(articles))
        return AnalysisOutcome(articles=articles, provider=fetched.provider)


__all__ = [
    "NewsAnalysisService",
    "PLACEHOLDER_CREDIBILITY",
    "PLACEHOLDER_MESSAGE",
    "assemble",
    "placeholder_article",
]
