"""Configuration helpers for the NewsSense service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging
import os

from dotenv import find_dotenv, load_dotenv

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _clean_key(value: Optional[str]) -> Optional[str]:
    """Treat empty values and shipped ``your_..._here`` placeholders as unset."""

    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    lowered = value.lower()
    if lowered.startswith("your_") and lowered.endswith("_here"):
        return None
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ProviderCredentials:
    """Credentials for the news providers, fixed at start-up."""

    gnews_api_key: Optional[str] = None
    news_api_key: Optional[str] = None

    @property
    def has_content_provider(self) -> bool:
        return self.gnews_api_key is not None

    @property
    def has_headline_provider(self) -> bool:
        return self.news_api_key is not None

    @property
    def any_configured(self) -> bool:
        return self.has_content_provider or self.has_headline_provider


@dataclass(frozen=True)
class FetcherConfig:
    """Configuration for provider calls."""

    page_size: int = 10
    timeout: float = 15.0


@dataclass(frozen=True)
class EnricherConfig:
    """Configuration for the source-page content enricher."""

    min_chars: int = 500
    timeout: float = 10.0
    concurrency: int = 5
    max_bytes: int = 2_000_000
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for the Gemini article analyzer."""

    api_key: Optional[str] = None
    model: str = "gemini-2.0-flash-exp"
    temperature: float = 0.3
    max_output_tokens: int = 500
    max_articles: int = 6
    json_mode: bool = False
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration for the service."""

    credentials: ProviderCredentials = field(default_factory=ProviderCredentials)
    fetcher: FetcherConfig = field(default_factory=FetcherConfig)
    enricher: EnricherConfig = field(default_factory=EnricherConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    api_host: str = "127.0.0.1"
    api_port: int = 5002
    cors_origins: Tuple[str, ...] = ("*",)


def configure_logging(level: int = logging.INFO) -> None:
    """Set up root logging; httpx request lines, which carry the GNews key, are kept below INFO."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Load configuration from the environment (and ``.env``) with sensible defaults."""

    load_dotenv(find_dotenv(usecwd=True))

    credentials = ProviderCredentials(
        gnews_api_key=_clean_key(os.getenv("GNEWS_API_KEY")),
        news_api_key=_clean_key(os.getenv("NEWS_API_KEY")),
    )
    fetcher = FetcherConfig(
        page_size=int(os.getenv("PROVIDER_PAGE_SIZE", "10")),
        timeout=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "15")),
    )
    enricher = EnricherConfig(
        min_chars=int(os.getenv("ENRICH_MIN_CHARS", "500")),
        timeout=float(os.getenv("ENRICH_TIMEOUT_SECONDS", "10")),
        concurrency=max(1, int(os.getenv("ENRICH_CONCURRENCY", "5"))),
        user_agent=os.getenv("ENRICH_USER_AGENT", DEFAULT_USER_AGENT),
        max_bytes=int(os.getenv("ENRICH_MAX_BYTES", "2000000")),
    )
    analyzer = AnalyzerConfig(
        api_key=_clean_key(os.getenv("GEMINI_API_KEY")),
        model=os.getenv("GEMINI_MODEL", "gemini-2.0-flash-exp"),
        max_articles=int(os.getenv("ANALYSIS_MAX_ARTICLES", "6")),
        json_mode=_env_bool("GEMINI_JSON_MODE", False),
    )

    origins_env = os.getenv("CORS_ORIGINS", "*")
    cors_origins = tuple(origin.strip() for origin in origins_env.split(",") if origin.strip())

    return AppConfig(
        credentials=credentials,
        fetcher=fetcher,
        enricher=enricher,
        analyzer=analyzer,
        api_host=os.getenv("API_HOST", "127.0.0.1"),
        api_port=int(os.getenv("PORT", "5002")),
        cors_origins=cors_origins or ("*",),
    )


__all__ = [
    "AnalyzerConfig",
    "AppConfig",
    "EnricherConfig",
    "FetcherConfig",
    "ProviderCredentials",
    "configure_logging",
    "load_config",
]
