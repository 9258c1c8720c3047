"""Provider fallback for the news pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .models import Article, SearchRequest
from .providers import ProviderPlan, ProviderSelector

LOGGER = logging.getLogger(__name__)

BROADENED_KEYWORDS = {"indian": "india"}
NO_ARTICLES_MESSAGE = "No articles found"


@dataclass
class FetchResult:
    articles: List[Article] = field(default_factory=list)
    provider: Optional[str] = None
    message: Optional[str] = None
    broadened: bool = False


class NewsFetcher:
    """Query providers in order; the first non-empty answer wins."""

    def __init__(self, selector: ProviderSelector) -> None:
        self.selector = selector

    def fetch(self, request: SearchRequest) -> FetchResult:
        plan = self.selector.select(request.region)
        result = self._first_success(plan, request)
        if result.articles:
            return result

        keyword = BROADENED_KEYWORDS.get(request.region)
        if keyword is not None:
            LOGGER.info(
                "No articles for %r in region %s; retrying with %r",
                request.query,
                request.region,
                keyword,
            )
            result = self._first_success(plan, request.broadened(keyword))
            if result.articles:
                result.broadened = True
                return result

        return FetchResult(message=NO_ARTICLES_MESSAGE)

    def _first_success(self, plan: ProviderPlan, request: SearchRequest) -> FetchResult:
        for provider in plan.providers:
            try:
                if request.wants_headlines:
                    articles = provider.top_headlines(
                        request.category, plan.country, request.language
                    )
                else:
                    articles = provider.search(request.query, plan.country, request.language)
            except Exception as exc:
                LOGGER.warning("Provider %s failed for %r: %s", provider.name, request.query, exc)
                continue
            if articles:
                LOGGER.info("Found %d articles via %s", len(articles), provider.name)
                return FetchResult(articles=articles, provider=provider.name)
            LOGGER.info("Provider %s returned no articles for %r", provider.name, request.query)
        return FetchResult()


__all__ = ["FetchResult", "NewsFetcher", "NO_ARTICLES_MESSAGE"]
