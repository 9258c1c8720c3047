"""Pydantic schemas for request and response payloads."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import REGIONS, OutputArticle, SearchRequest


class AnalyzeNewsRequest(BaseModel):
    query: str = Field(..., description="Search keywords, or 'latest' for top stories")
    category: str = Field("general", description="Category label echoed on every article")
    region: str = Field("global", description="One of 'global' or 'indian'")
    language: str = Field("en", description="Two-letter language code")

    @field_validator("query")
    @classmethod
    def validate_query(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("query must not be empty")
        return cleaned

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        return value.strip() or "general"

    @field_validator("region")
    @classmethod
    def validate_region(cls, value: str) -> str:
        cleaned = value.strip().lower() or "global"
        if cleaned not in REGIONS:
            raise ValueError(f"region must be one of: {', '.join(REGIONS)}")
        return cleaned

    @field_validator("language")
    @classmethod
    def validate_language(cls, value: str) -> str:
        return value.strip().lower() or "en"

    def to_search_request(self) -> SearchRequest:
        return SearchRequest(
            query=self.query,
            category=self.category,
            region=self.region,
            language=self.language,
        )


class SourceLink(BaseModel):
    name: str
    url: str


class ArticleResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    content: str
    summary: str
    credibility: int = Field(..., ge=0, le=100)
    sources: List[SourceLink]
    category: str
    published_at: Optional[str] = Field(None, alias="publishedAt")

    @classmethod
    def from_article(cls, article: OutputArticle) -> "ArticleResponse":
        return cls(
            title=article.title,
            content=article.content,
            summary=article.summary,
            credibility=article.credibility,
            sources=[SourceLink(**source) for source in article.sources],
            category=article.category,
            published_at=article.published_at,
        )


class AnalyzeNewsResponse(BaseModel):
    articles: List[ArticleResponse]
    message: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    providers: List[str]


__all__ = [
    "AnalyzeNewsRequest",
    "AnalyzeNewsResponse",
    "ArticleResponse",
    "HealthResponse",
    "SourceLink",
]
