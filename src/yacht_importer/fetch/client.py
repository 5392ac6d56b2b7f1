# ABOUTME: Page fetching seam: PageFetcher protocol and the default httpx implementation
# ABOUTME: Tries the URL directly, then each configured relay prefix, retrying transient failures

from typing import Protocol
from urllib.parse import quote

import httpx

from yacht_importer.config import Config, get_config
from yacht_importer.utils.logging import get_logger
from yacht_importer.utils.retry import FetchError, fetch_retry

BLOCKED_MESSAGE = "Unable to fetch URL. The website may be blocking automated access."


class PageFetcher(Protocol):
    """Protocol for anything that can turn a URL into HTML text."""

    async def fetch(self, url: str) -> str:
        """Fetch the HTML of a page.

        Args:
            url: Absolute page address

        Returns:
            The response body as text

        Raises:
            FetchError: If the page could not be retrieved
        """
        ...


class HttpPageFetcher:
    """Fetch pages over HTTP with httpx, falling back to relay prefixes when direct access fails."""

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        config: Config | None = None,
        min_retry_wait: float = 0.5,
        max_retry_wait: float = 8.0,
    ):
        """Initialize the fetcher.

        Args:
            client: Shared httpx client (a new one is created and owned when omitted)
            config: Fetch settings (defaults to the process configuration)
            min_retry_wait: Shortest backoff between retries, in seconds
            max_retry_wait: Longest backoff between retries, in seconds
        """
        self.config = config or get_config()
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": self.config.user_agent, "Accept": "text/html,application/xhtml+xml"},
            timeout=self.config.request_timeout,
            follow_redirects=True,
        )
        self.min_retry_wait = min_retry_wait
        self.max_retry_wait = max_retry_wait
        self.logger = get_logger(__name__)

    def candidate_urls(self, url: str) -> list[str]:
        """The direct URL followed by the URL behind every configured relay prefix."""
        return [url, *(prefix + quote(url, safe="") for prefix in self.config.proxy_prefixes)]

    async def fetch(self, url: str) -> str:
        targets = self.candidate_urls(url)
        last_error: FetchError | None = None

        for target in targets:
            try:
                html = await self._get_with_retry(target)
            except FetchError as e:
                self.logger.warning("Fetch attempt failed", url=url, target=target, error=str(e))
                last_error = e
                continue

            self.logger.debug("Fetched page", url=url, target=target, html_length=len(html))
            return html

        if len(targets) == 1 and last_error is not None:
            raise last_error
        raise FetchError(BLOCKED_MESSAGE) from last_error

    async def _get_with_retry(self, target: str) -> str:
        retrying_get = fetch_retry(
            max_attempts=self.config.fetch_max_attempts,
            min_wait=self.min_retry_wait,
            max_wait=self.max_retry_wait,
        )(self._get)
        return await retrying_get(target)

    async def _get(self, target: str) -> str:
        response = await self.http_client.get(target)
        response.raise_for_status()
        return response.text

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "HttpPageFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
