"""Exceptions raised by the fetch-and-extract pipeline."""


class CrawlerError(Exception):
    """Base class for all cxcrawler errors."""


class ConfigurationError(CrawlerError):
    """The client is missing required configuration (e.g. the site origin)."""


class FetchError(CrawlerError):
    """A page could not be retrieved after exhausting all attempts."""

    def __init__(
        self,
        message: str,
        url: str = "",
        attempts: int = 0,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.attempts = attempts
        self.status_code = status_code


class EmptyContentError(CrawlerError, ValueError):
    """An extractor was handed blank document text."""
