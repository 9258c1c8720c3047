"""Best-effort replacement of truncated article bodies with source-page text."""

from __future__ import annotations

import concurrent.futures as futures
import logging
import time
from typing import List, Optional, Sequence

import httpx
from bs4 import BeautifulSoup, Tag

from .config import EnricherConfig
from .models import Article

LOGGER = logging.getLogger(__name__)

NON_TEXT_TAGS = ["script", "style", "noscript", "template"]


def _has_content_class(value: Optional[str]) -> bool:
    return bool(value) and "content" in value


def _visible_text(node: Tag) -> str:
    for tag in node.find_all(NON_TEXT_TAGS):
        tag.decompose()
    return " ".join(node.get_text(" ").split())


def clean_markup(fragment: str) -> str:
    """Strip tags from an HTML fragment and collapse whitespace."""

    return _visible_text(BeautifulSoup(fragment, "html.parser"))


def extract_main_text(markup: str) -> Optional[str]:
    """Return the text of the first ``<article>``, ``div.*content*`` or ``<p>`` block."""

    soup = BeautifulSoup(markup, "html.parser")
    for finder in (
        lambda: soup.find("article"),
        lambda: soup.find("div", class_=_has_content_class),
        lambda: soup.find("p"),
    ):
        block = finder()
        if block is not None:
            return _visible_text(block)
    return None


class ContentEnricher:
    """Fetch source pages for short articles and keep the longer body."""

    def __init__(self, config: EnricherConfig, client: httpx.Client) -> None:
        self.config = config
        self.client = client

    def needs_enrichment(self, article: Article) -> bool:
        return bool(article.url) and article.body_length() < self.config.min_chars

    def _read_page(self, url: str) -> Optional[str]:
        """Download an HTML page within the overall deadline and byte cap."""

        deadline = time.monotonic() + self.config.timeout
        with self.client.stream(
            "GET",
            url,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout,
            follow_redirects=True,
        ) as response:
            response.raise_for_status()
            content_type = response.headers.get("content-type", "")
            if content_type and "html" not in content_type.lower():
                LOGGER.debug("Skipping %s: content type %s", url, content_type)
                return None

            body = bytearray()
            for chunk in response.iter_bytes():
                if time.monotonic() > deadline:
                    LOGGER.debug("Gave up on %s after %.1fs", url, self.config.timeout)
                    return None
                body.extend(chunk)
                if len(body) >= self.config.max_bytes:
                    del body[self.config.max_bytes :]
                    break
            encoding = response.charset_encoding or "utf-8"
        return body.decode(encoding, errors="replace")

    def _fetch_text(self, url: str) -> Optional[str]:
        try:
            markup = self._read_page(url)
        except Exception as exc:
            LOGGER.debug("Could not fetch %s for enrichment: %s", url, exc)
            return None
        if markup is None:
            return None
        return extract_main_text(markup)

    def enrich_article(self, article: Article) -> Article:
        if not self.needs_enrichment(article):
            return article
        text = self._fetch_text(article.url)
        if text and len(text) > article.body_length():
            LOGGER.debug(
                "Enriched %s: %d -> %d chars", article.url, article.body_length(), len(text)
            )
            article.content = text
        return article

    def enrich(self, articles: Sequence[Article]) -> List[Article]:
        """Enrich every article concurrently; the returned order matches the input."""

        if not articles:
            return []
        with futures.ThreadPoolExecutor(max_workers=self.config.concurrency) as pool:
            return list(pool.map(self._safe_enrich, articles))

    def _safe_enrich(self, article: Article) -> Article:
        try:
            return self.enrich_article(article)
        except Exception:  # pragma: no cover - extraction must never fail the request
            LOGGER.debug("Enrichment failed for %s", article.url, exc_info=True)
            return article


__all__ = ["ContentEnricher", "clean_markup", "extract_main_text"]
