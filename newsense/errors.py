"""Exception types raised by the NewsSense pipeline."""

from __future__ import annotations


class NewsenseError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(NewsenseError):
    """A required credential or setting is missing; fatal for the request."""


class ProviderError(NewsenseError):
    """A news provider could not be reached or answered with an error."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


__all__ = ["ConfigurationError", "NewsenseError", "ProviderError"]
