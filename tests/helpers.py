"""Fakes and payload builders shared by the tests."""

import json
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx

from newsense.config import AnalyzerConfig, AppConfig, ProviderCredentials

GNEWS_HOST = "gnews.io"
NEWSAPI_HOST = "newsapi.org"
GEMINI_HOST = "generativelanguage.googleapis.com"

Route = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeWeb:
    """Routes outbound requests by host and path; unknown URLs answer 404."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, Optional[str]], Route] = {}
        self._lock = threading.Lock()

    def add(self, host: str, path: Optional[str], route: Route) -> None:
        self._routes[(host, path)] = route

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        route = self._routes.get((request.url.host, request.url.path))
        if route is None:
            route = self._routes.get((request.url.host, None))
        if route is None:
            return httpx.Response(404, text="not found")
        if callable(route):
            return route(request)
        return route

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def calls(self, host: str, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.url.host == host and (path is None or request.url.path == path)
        ]


def gnews_article(index: int, **overrides: Any) -> Dict[str, Any]:
    article = {
        "title": f"Story {index}",
        "description": f"Description {index}",
        "content": f"Body of story {index}",
        "url": f"https://example.com/story-{index}",
        "image": None,
        "publishedAt": f"2024-05-0{index % 9 + 1}T10:00:00Z",
        "source": {"name": f"Outlet {index}", "url": "https://example.com"},
    }
    article.update(overrides)
    return article


def articles_payload(count: int, **overrides: Any) -> Dict[str, Any]:
    return {
        "totalArticles": count,
        "articles": [gnews_article(i, **overrides) for i in range(1, count + 1)],
    }


def gemini_reply(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def gemini_json(summary: str = "A short summary.", credibility: Any = 82) -> Dict[str, Any]:
    payload = json.dumps({"summary": summary, "credibility": credibility, "reasoning": "ok"})
    return gemini_reply(f"Here is the analysis:\n```json\n{payload}\n```")


def make_config(
    gnews_key: Optional[str] = "gnews-key",
    news_api_key: Optional[str] = "newsapi-key",
    gemini_key: Optional[str] = "gemini-key",
) -> AppConfig:
    return AppConfig(
        credentials=ProviderCredentials(gnews_api_key=gnews_key, news_api_key=news_api_key),
        analyzer=AnalyzerConfig(api_key=gemini_key),
    )


def html_page(body: str, status: int = 200) -> httpx.Response:
    return httpx.Response(
        status,
        content=f"<html><head><title>t</title></head><body>{body}</body></html>".encode("utf-8"),
        headers={"content-type": "text/html; charset=utf-8"},
    )
