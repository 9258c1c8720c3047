"""NewsSense news analysis package."""

from .config import AppConfig, ProviderCredentials, load_config
from .models import AnalysisOutcome, OutputArticle, SearchRequest
from .service import NewsAnalysisService

__all__ = [
    "AnalysisOutcome",
    "AppConfig",
    "NewsAnalysisService",
    "OutputArticle",
    "ProviderCredentials",
    "SearchRequest",
    "load_config",
]
