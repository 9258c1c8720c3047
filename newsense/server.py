"""FastAPI application exposing the news analysis pipeline."""

from __future__ import annotations

import logging
from typing import Sequence

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ConfigurationError
from .schemas import AnalyzeNewsRequest, AnalyzeNewsResponse, ArticleResponse, HealthResponse
from .service import NewsAnalysisService

LOGGER = logging.getLogger(__name__)


def create_app(
    service: NewsAnalysisService,
    cors_origins: Sequence[str] = ("*",),
) -> FastAPI:
    app = FastAPI(title="NewsSense", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_service() -> NewsAnalysisService:
        return service

    @app.get("/healthz", response_model=HealthResponse)
    def health_check(svc: NewsAnalysisService = Depends(get_service)) -> HealthResponse:
        return HealthResponse(status="ok", providers=svc.provider_names)

    @app.post(
        "/api/analyze-news",
        response_model=AnalyzeNewsResponse,
    )
    def analyze_news(
        request: AnalyzeNewsRequest,
        svc: NewsAnalysisService = Depends(get_service),
    ):
        try:
            outcome = svc.analyze(request.to_search_request())
        except ConfigurationError as exc:
            LOGGER.error("Configuration error in analyze-news: %s", exc)
            return JSONResponse(status_code=500, content={"error": str(exc)})
        except Exception as exc:
            LOGGER.exception("Error in analyze-news")
            return JSONResponse(
                status_code=500,
                content={"error": str(exc) or "Internal server error"},
            )

        payload = AnalyzeNewsResponse(
            articles=[ArticleResponse.from_article(article) for article in outcome.articles],
            message=outcome.message,
        ).model_dump(by_alias=True)
        # Successful searches carry no message key at all.
        if payload["message"] is None:
            del payload["message"]
        return JSONResponse(content=payload)

    return app


__all__ = ["create_app"]
