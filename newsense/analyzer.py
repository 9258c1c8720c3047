"""Gemini-backed summaries and credibility scores with graceful fallback."""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from .config import AnalyzerConfig
from .errors import ConfigurationError
from .models import AnalysisResult, Article

LOGGER = logging.getLogger(__name__)

DEFAULT_CREDIBILITY = 70
# A total processing failure is scored below a present but malformed reply.
FAILURE_CREDIBILITY = 65
NO_SUMMARY = "No summary available"
SUMMARY_UNAVAILABLE = "Summary unavailable"
NO_CONTENT = "No content available"

PROMPT_TEMPLATE = """Analyze this news article and provide:
1. A concise 2-3 sentence summary
2. A credibility score from 0-100 based on:
   - Source reliability ({source})
   - Content quality and factual tone
   - Presence of citations or verifiable claims

Article Title: {title}
Source: {source}
Content: {content}

Respond in JSON format:
{{
  "summary": "your summary here",
  "credibility": 85,
  "reasoning": "brief explanation"
}}"""

JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


def build_prompt(article: Article) -> str:
    content = article.description or article.content or NO_CONTENT
    return PROMPT_TEMPLATE.format(
        title=article.title,
        source=article.source_name,
        content=content,
    )


def extract_payload(text: str) -> Optional[Dict[str, Any]]:
    """Parse the brace-delimited JSON object embedded in a free-text reply."""

    match = JSON_BLOCK_RE.search(text)
    if not match:
        return None
    try:
        payload = json.loads(match.group(0))
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def coerce_credibility(value: Any, default: int = DEFAULT_CREDIBILITY) -> int:
    """Return ``value`` as an integer clamped into [0, 100], or ``default``."""

    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return default
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return default
    return int(min(100, max(0, round(value))))


class ArticleAnalyzer:
    """Summarize articles and score their credibility through Gemini."""

    def __init__(self, config: AnalyzerConfig, client: httpx.Client) -> None:
        self.config = config
        self.client = client

    def ensure_configured(self) -> None:
        if not self.config.api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured")

    def _endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/models/{self.config.model}:generateContent"

    def _call_llm(self, prompt: str) -> Optional[str]:
        """Return the first candidate's text, or ``None`` when Gemini offered none."""

        generation_config: Dict[str, Any] = {
            "temperature": self.config.temperature,
            "maxOutputTokens": self.config.max_output_tokens,
        }
        if self.config.json_mode:
            generation_config["responseMimeType"] = "application/json"
        response = self.client.post(
            self._endpoint(),
            headers={"x-goog-api-key": self.config.api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": generation_config,
            },
        )
        response.raise_for_status()
        data = response.json()
        candidates = data.get("candidates") or []
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts = [part.get("text", "") for part in parts if isinstance(part, dict)]
        text = "".join(texts).strip()
        return text or None

    @staticmethod
    def _fallback(article: Article, summary: str, credibility: int) -> AnalysisResult:
        return AnalysisResult(summary=article.description or summary, credibility=credibility)

    def analyze_article(self, article: Article) -> AnalysisResult:
        """Analyze one article; never raises."""

        try:
            reply = self._call_llm(build_prompt(article))
            if reply is None:
                LOGGER.warning("No Gemini response for %r, using fallback", article.title[:50])
                return self._fallback(article, NO_SUMMARY, DEFAULT_CREDIBILITY)

            payload = extract_payload(reply)
            if payload is None:
                LOGGER.warning("Failed to parse AI response for %r, using fallback", article.title[:50])
                return self._fallback(article, NO_SUMMARY, DEFAULT_CREDIBILITY)

            summary = payload.get("summary")
            if not isinstance(summary, str) or not summary.strip():
                summary = article.description or NO_SUMMARY
            return AnalysisResult(
                summary=summary.strip(),
                credibility=coerce_credibility(payload.get("credibility")),
            )
        except Exception as exc:
            LOGGER.warning("Error processing article %r: %s", article.title, exc)
            return self._fallback(article, SUMMARY_UNAVAILABLE, FAILURE_CREDIBILITY)

    def analyze(self, articles: Sequence[Article]) -> List[Tuple[Article, AnalysisResult]]:
        """Analyze up to ``max_articles`` articles one at a time, preserving order."""

        selected = list(articles)[: self.config.max_articles]
        return [(article, self.analyze_article(article)) for article in selected]


__all__ = [
    "ArticleAnalyzer",
    "DEFAULT_CREDIBILITY",
    "FAILURE_CREDIBILITY",
    "build_prompt",
    "coerce_credibility",
    "extract_payload",
]
