"""News provider clients and the provider selector."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import httpx
import tldextract

from .config import FetcherConfig, ProviderCredentials
from .errors import ProviderError
from .models import Article

LOGGER = logging.getLogger(__name__)

REGION_COUNTRIES: Dict[str, str] = {"indian": "in"}

# Offline extractor: use the bundled public suffix snapshot.
_DOMAIN_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())

GNEWS_CATEGORIES = {
    "general",
    "world",
    "nation",
    "business",
    "technology",
    "entertainment",
    "sports",
    "science",
    "health",
}


def country_for_region(region: str) -> Optional[str]:
    """Map a client region to a provider country code; ``None`` means no filter."""

    return REGION_COUNTRIES.get(region)


def _domain_of(url: str) -> str:
    ext = _DOMAIN_EXTRACT(url)
    return ".".join(part for part in [ext.domain, ext.suffix] if part)


def _normalize(entry: Dict[str, Any]) -> Optional[Article]:
    title = (entry.get("title") or "").strip()
    url = (entry.get("url") or "").strip()
    # NewsAPI keeps deleted stories in results with this marker title.
    if not title or not url or title == "[Removed]":
        return None
    source = entry.get("source") or {}
    source_name = (source.get("name") or "").strip() if isinstance(source, dict) else ""
    if not source_name:
        source_name = _domain_of(url) or "Unknown source"
    return Article(
        title=title,
        url=url,
        source_name=source_name,
        description=entry.get("description") or None,
        content=entry.get("content") or None,
        published_at=entry.get("publishedAt"),
    )


class NewsProvider:
    """Base class for keyed REST news providers returning ``{articles: [...]}``."""

    name = "provider"
    base_url = ""

    def __init__(self, api_key: str, client: httpx.Client, config: FetcherConfig) -> None:
        self.api_key = api_key
        self.client = client
        self.config = config

    def top_headlines(self, category: str, country: Optional[str], language: str) -> List[Article]:
        raise NotImplementedError

    def search(self, query: str, country: Optional[str], language: str) -> List[Article]:
        raise NotImplementedError

    def _get(
        self,
        path: str,
        params: Dict[str, Any],
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Article]:
        query = {key: value for key, value in params.items() if value is not None}
        LOGGER.debug("Requesting %s/%s (q=%s)", self.name, path, query.get("q"))
        try:
            response = self.client.get(
                f"{self.base_url}/{path}",
                params=query,
                headers=headers,
                timeout=self.config.timeout,
            )
        except httpx.HTTPError as exc:
            raise ProviderError(self.name, f"request failed: {exc!r}") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code != 200:
            message = data.get("message") if isinstance(data, dict) else None
            if not message and isinstance(data, dict):
                errors = data.get("errors")
                if isinstance(errors, list) and errors:
                    message = str(errors[0])
            raise ProviderError(
                self.name, message or f"unexpected status {response.status_code}"
            )

        entries = data.get("articles") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            return []
        articles: List[Article] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            article = _normalize(entry)
            if article is not None:
                articles.append(article)
        return articles


class GNewsProvider(NewsProvider):
    """Content-rich provider: returns article bodies alongside descriptions."""

    name = "gnews"
    base_url = "https://gnews.io/api/v4"

    def top_headlines(self, category: str, country: Optional[str], language: str) -> List[Article]:
        category = category.lower()
        return self._get(
            "top-headlines",
            {
                "category": category if category in GNEWS_CATEGORIES else "general",
                "lang": language,
                "country": country,
                "max": self.config.page_size,
                "apikey": self.api_key,
            },
        )

    def search(self, query: str, country: Optional[str], language: str) -> List[Article]:
        return self._get(
            "search",
            {
                "q": query,
                "lang": language,
                "country": country,
                "sortby": "publishedAt",
                "max": self.config.page_size,
                "apikey": self.api_key,
            },
        )


class NewsAPIProvider(NewsProvider):
    """Headline-only provider."""

    name = "newsapi"
    base_url = "https://newsapi.org/v2"

    def _auth_headers(self) -> Dict[str, str]:
        return {"X-Api-Key": self.api_key}

    def top_headlines(self, category: str, country: Optional[str], language: str) -> List[Article]:
        # top-headlines needs a country; the unfiltered feed falls back to US stories.
        return self._get(
            "top-headlines",
            {
                "country": country or "us",
                "pageSize": self.config.page_size,
            },
            headers=self._auth_headers(),
        )

    def search(self, query: str, country: Optional[str], language: str) -> List[Article]:
        return self._get(
            "everything",
            {
                "q": query,
                "sortBy": "publishedAt",
                "pageSize": self.config.page_size,
                "language": language,
            },
            headers=self._auth_headers(),
        )


@dataclass(frozen=True)
class ProviderPlan:
    """Ordered providers plus the country filter derived from the region."""

    providers: Sequence[NewsProvider]
    country: Optional[str]


class ProviderSelector:
    """Decide which providers to try, in priority order."""

    def __init__(
        self,
        credentials: ProviderCredentials,
        client: httpx.Client,
        config: FetcherConfig,
    ) -> None:
        self.credentials = credentials
        providers: List[NewsProvider] = []
        if credentials.has_content_provider:
            providers.append(GNewsProvider(credentials.gnews_api_key, client, config))
        if credentials.has_headline_provider:
            providers.append(NewsAPIProvider(credentials.news_api_key, client, config))
        self._providers = tuple(providers)

    @property
    def configured(self) -> bool:
        return self.credentials.any_configured

    @property
    def provider_names(self) -> List[str]:
        return [provider.name for provider in self._providers]

    def select(self, region: str) -> ProviderPlan:
        """Return the providers to try for ``region``; empty when nothing is configured."""

        return ProviderPlan(providers=self._providers, country=country_for_region(region))


__all__ = [
    "GNewsProvider",
    "NewsAPIProvider",
    "NewsProvider",
    "ProviderPlan",
    "ProviderSelector",
    "country_for_region",
]
