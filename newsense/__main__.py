"""Entrypoint for running the NewsSense API server."""

from __future__ import annotations

import logging

import uvicorn

from .config import configure_logging, load_config
from .server import create_app
from .service import NewsAnalysisService


def main() -> None:
    configure_logging()
    config = load_config()

    if not config.analyzer.api_key:
        logging.warning("GEMINI_API_KEY is not set; /api/analyze-news will answer with 500")

    service = NewsAnalysisService(config)
    if service.provider_names:
        logging.info("News providers in priority order: %s", ", ".join(service.provider_names))
    else:
        logging.warning("No news provider key configured; responses will use sample data")

    app = create_app(service, config.cors_origins)

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # pragma: no cover - runtime hook
        service.close()

    logging.info("Starting API server on %s:%s", config.api_host, config.api_port)
    try:
        uvicorn.run(app, host=config.api_host, port=config.api_port)
    finally:
        service.close()


if __name__ == "__main__":  # pragma: no cover
    main()
