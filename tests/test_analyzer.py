import json
import logging

import httpx
import pytest

from newsense.analyzer import (
    DEFAULT_CREDIBILITY,
    FAILURE_CREDIBILITY,
    ArticleAnalyzer,
    build_prompt,
    coerce_credibility,
    extract_payload,
)
from newsense.config import AnalyzerConfig
from newsense.errors import ConfigurationError
from newsense.models import Article

from .helpers import GEMINI_HOST, gemini_json, gemini_reply


def make_article(index: int = 1, description="Description", content="Body") -> Article:
    return Article(
        title=f"Story {index}",
        url=f"https://example.com/{index}",
        source_name="Reuters",
        description=description,
        content=content,
    )


@pytest.fixture
def analyzer(http_client):
    return ArticleAnalyzer(AnalyzerConfig(api_key="gemini-key"), http_client)


@pytest.mark.parametrize(
    "value, expected",
    [
        (85, 85),
        (150, 100),
        (-3, 0),
        (0, 0),
        (72.6, 73),
        ("90", 90),
        ("88%", 88),
        ("high", DEFAULT_CREDIBILITY),
        (None, DEFAULT_CREDIBILITY),
        (True, DEFAULT_CREDIBILITY),
        (float("nan"), DEFAULT_CREDIBILITY),
        ([80], DEFAULT_CREDIBILITY),
    ],
)
def test_coerce_credibility(value, expected):
    result = coerce_credibility(value)
    assert result == expected
    assert isinstance(result, int)


def test_extract_payload_from_free_text():
    text = 'Sure!\n```json\n{"summary": "S", "credibility": 70}\n```\nThanks.'
    assert extract_payload(text) == {"summary": "S", "credibility": 70}


@pytest.mark.parametrize(
    "text, expected",
    [
        ("no braces at all", None),
        ("{not json}", None),
        ("[1, 2]", None),
        ("{} and {", {}),
    ],
)
def test_extract_payload_rejects_garbage(text, expected):
    assert extract_payload(text) == expected


def test_build_prompt_prefers_description():
    prompt = build_prompt(make_article(description="Desc", content="Body"))
    assert "Content: Desc" in prompt
    assert "Source: Reuters" in prompt
    assert "Source reliability (Reuters)" in prompt
    assert '"credibility": 85' in prompt


def test_build_prompt_falls_back_to_content_then_placeholder():
    assert "Content: Body" in build_prompt(make_article(description=None))
    assert "Content: No content available" in build_prompt(
        make_article(description=None, content=None)
    )


def test_analyze_article_success(web, analyzer):
    web.add(GEMINI_HOST, None, httpx.Response(200, json=gemini_json("Great summary.", 91)))

    result = analyzer.analyze_article(make_article())

    assert result.summary == "Great summary."
    assert result.credibility == 91
    request = web.calls(GEMINI_HOST)[0]
    assert request.url.path.endswith("/models/gemini-2.0-flash-exp:generateContent")
    assert request.headers["x-goog-api-key"] == "gemini-key"
    assert "key" not in request.url.params
    body = json.loads(request.content)
    assert body["generationConfig"] == {"temperature": 0.3, "maxOutputTokens": 500}


def test_analyze_article_clamps_out_of_range(web, analyzer):
    web.add(GEMINI_HOST, None, httpx.Response(200, json=gemini_json(credibility=400)))
    assert analyzer.analyze_article(make_article()).credibility == 100


def test_no_candidates_falls_back_to_description(web, analyzer):
    web.add(GEMINI_HOST, None, httpx.Response(200, json={"candidates": []}))

    result = analyzer.analyze_article(make_article(description="Desc"))

    assert result.summary == "Desc"
    assert result.credibility == DEFAULT_CREDIBILITY


def test_unparseable_reply_uses_default_tier(web, analyzer):
    web.add(GEMINI_HOST, None, httpx.Response(200, json=gemini_reply("I cannot answer that.")))

    result = analyzer.analyze_article(make_article(description=None))

    assert result.summary == "No summary available"
    assert result.credibility == DEFAULT_CREDIBILITY


def test_exception_uses_failure_tier(web, analyzer):
    web.add(GEMINI_HOST, None, httpx.Response(500, json={"error": {"message": "boom"}}))

    result = analyzer.analyze_article(make_article(description=None))

    assert result.summary == "Summary unavailable"
    assert result.credibility == FAILURE_CREDIBILITY


def test_missing_summary_in_payload(web, analyzer):
    reply = gemini_reply(json.dumps({"credibility": 40}))
    web.add(GEMINI_HOST, None, httpx.Response(200, json=reply))

    result = analyzer.analyze_article(make_article(description="Desc"))

    assert result.summary == "Desc"
    assert result.credibility == 40


def test_analyze_limits_and_isolates_failures(web, analyzer):
    calls = {"count": 0}

    def flaky(request):
        calls["count"] += 1
        if calls["count"] == 2:
            raise httpx.ConnectError("down", request=request)
        return httpx.Response(200, json=gemini_json(f"Summary {calls['count']}", 80))

    web.add(GEMINI_HOST, None, flaky)
    articles = [make_article(index) for index in range(1, 10)]

    results = analyzer.analyze(articles)

    assert len(results) == 6
    assert calls["count"] == 6
    assert [article.title for article, _ in results] == [f"Story {i}" for i in range(1, 7)]
    assert results[1][1].credibility == FAILURE_CREDIBILITY
    assert results[2][1].summary == "Summary 3"


def test_json_mode_requests_json_mime_type(web, http_client):
    web.add(GEMINI_HOST, None, httpx.Response(200, json=gemini_json()))
    analyzer = ArticleAnalyzer(AnalyzerConfig(api_key="k", json_mode=True), http_client)

    analyzer.analyze_article(make_article())

    body = json.loads(web.calls(GEMINI_HOST)[0].content)
    assert body["generationConfig"]["responseMimeType"] == "application/json"


def test_ensure_configured_requires_key(http_client):
    analyzer = ArticleAnalyzer(AnalyzerConfig(api_key=None), http_client)
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        analyzer.ensure_configured()


def test_api_key_stays_out_of_request_logs(web, analyzer, caplog):
    caplog.set_level(logging.INFO)
    web.add(GEMINI_HOST, None, httpx.Response(200, json=gemini_json()))

    analyzer.analyze_article(make_article())

    assert "gemini-key" not in caplog.text
    assert "gemini-key" not in str(web.calls(GEMINI_HOST)[0].url)
