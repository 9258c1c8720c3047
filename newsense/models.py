"""Core data models for the news pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

REGIONS = ("global", "indian")


@dataclass(frozen=True)
class SearchRequest:
    """A single client search; never persisted."""

    query: str
    category: str = "general"
    region: str = "global"
    language: str = "en"

    @property
    def wants_headlines(self) -> bool:
        """Return True when the request asks for top stories instead of a keyword search."""

        return self.category.lower() == "general" and self.query == "latest"

    def broadened(self, keyword: str) -> "SearchRequest":
        return replace(self, query=keyword)


@dataclass
class Article:
    """A provider article, possibly with content replaced by enrichment."""

    title: str
    url: str
    source_name: str
    description: Optional[str] = None
    content: Optional[str] = None
    published_at: Optional[str] = None

    def body_length(self) -> int:
        return len(self.content or "")


@dataclass(frozen=True)
class AnalysisResult:
    summary: str
    credibility: int


@dataclass
class OutputArticle:
    """The client-facing article record."""

    title: str
    content: str
    summary: str
    credibility: int
    sources: List[Dict[str, str]] = field(default_factory=list)
    category: str = "general"
    published_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "summary": self.summary,
            "credibility": self.credibility,
            "sources": [dict(source) for source in self.sources],
            "category": self.category,
            "publishedAt": self.published_at,
        }


@dataclass
class AnalysisOutcome:
    """Result of one pipeline run."""

    articles: List[OutputArticle]
    message: Optional[str] = None
    provider: Optional[str] = None


__all__ = [
    "REGIONS",
    "AnalysisOutcome",
    "AnalysisResult",
    "Article",
    "OutputArticle",
    "SearchRequest",
]
