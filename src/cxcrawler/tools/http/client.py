"""Fault-tolerant page fetcher for the cxsecurity site."""

import logging
import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import httpx
from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_fixed,
)

from cxcrawler.modules.vulndb.errors import ConfigurationError, FetchError
from cxcrawler.modules.vulndb.normalize import DEFAULT_ORIGIN

from .headers import merge_headers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientSettings:
    """Immutable fetcher configuration."""

    base_url: str = DEFAULT_ORIGIN
    timeout: float = 30.0
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    proxy: str | None = None
    max_retries: int = 3
    retry_delay: float = 0.5


def _is_retryable(exc: BaseException) -> bool:
    """Every httpx request error is retried, and so is a 5xx response."""
    return isinstance(exc, (httpx.RequestError, FetchError))


class PageClient:
    """Synchronous page fetcher with bounded retry.

    Any httpx request error or a 5xx response counts as a failed attempt. Up to
    ``max_retries + 1`` attempts are made with ``retry_delay`` seconds slept
    before each retry. Any other status returns the body unchanged, so a
    missing record is only visible from the page content.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        transport: httpx.BaseTransport | None = None,
    ):
        self.settings = settings or ClientSettings()
        self._sleep = sleep
        self._transport = transport
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def _http(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=self.settings.timeout,
                    follow_redirects=True,
                    proxy=self.settings.proxy or None,
                    transport=self._transport,
                )
            return self._client

    def get_page(self, path: str) -> str:
        """Fetch ``path`` relative to the configured origin and return its body.

        A path without a leading slash is treated as if it had one.

        Raises:
            ConfigurationError: No base URL is configured.
            FetchError: Every attempt failed; chained to the last cause.
        """
        if not self.settings.base_url:
            raise ConfigurationError("Base URL is not configured")

        if not path.startswith("/"):
            path = "/" + path
        url = self.settings.base_url.rstrip("/") + path
        attempts = max(0, self.settings.max_retries) + 1

        def log_failure(retry_state: RetryCallState) -> None:
            logger.warning(
                "Attempt %d/%d for %s failed: %s",
                retry_state.attempt_number,
                attempts,
                url,
                retry_state.outcome.exception(),
            )

        retrying = Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_fixed(self.settings.retry_delay),
            retry=retry_if_exception(_is_retryable),
            sleep=self._sleep,
            after=log_failure,
            reraise=False,
        )
        try:
            return retrying(self._request, url)
        except RetryError as exc:
            last_error = exc.last_attempt.exception()
            logger.error("Giving up on %s after %d attempts", url, attempts)
            raise FetchError(
                f"Failed to fetch {url} after {attempts} attempts: {last_error}",
                url=url,
                attempts=attempts,
                status_code=last_error.status_code if isinstance(last_error, FetchError) else None,
            ) from last_error

    def _request(self, url: str) -> str:
        response = self._http().get(url, headers=merge_headers(self.settings.headers))
        if 500 <= response.status_code < 600:
            raise FetchError(
                f"Server error: {response.status_code} {response.reason_phrase}",
                url=url,
                attempts=1,
                status_code=response.status_code,
            )
        logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        return response.text
