from typing import Any, Dict, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from rosterboard.config.settings import AppSettings, settings as default_settings

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class FetchError(Exception):
    """Custom exception for transport failures while reading a sheet."""

    pass


class RetryableStatusError(FetchError):
    """Raised for HTTP statuses that are worth another attempt."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Retryable HTTP status {status_code} from {url}")
        self.status_code = status_code


class BaseFetcher:
    """Owns the HTTP client and the retry policy for spreadsheet requests."""

    source_name: str = "unknown"

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        app_settings: Optional[AppSettings] = None,
    ):
        self.settings = app_settings or default_settings
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.http_timeout_seconds),
            follow_redirects=True,  # Published sheets redirect to googleusercontent
            headers={"User-Agent": self.settings.user_agent},
        )

    @retry(
        stop=stop_after_attempt(4),  # Max 3 retries (4 total attempts)
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.RequestError, RetryableStatusError)),
        reraise=True,  # Reraise the last exception after max attempts
    )
    async def _make_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        **kwargs,
    ) -> httpx.Response:
        """Makes an asynchronous HTTP request with retry logic."""
        logger.debug(f"Making {method} request to {url}")
        try:
            response = await self.client.request(method, url, params=params, **kwargs)
        except httpx.RequestError as e:
            # Network errors, timeouts etc. are retried by tenacity
            logger.warning(f"Request error for {self.source_name}, retrying: {e}")
            raise

        if response.status_code in RETRYABLE_STATUS_CODES:
            logger.warning(
                f"Retrying request for {self.source_name} due to status {response.status_code}"
            )
            raise RetryableStatusError(response.status_code, url)

        if response.is_error:
            logger.error(
                f"HTTP error during request for {self.source_name}: {response.status_code} at {url}"
            )
            raise FetchError(f"HTTP error: {response.status_code}")

        logger.debug(f"Request successful: {response.status_code} for {url}")
        return response

    async def fetch_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """GETs ``url`` and returns the decoded body, raising FetchError on failure."""
        try:
            response = await self._make_request("GET", url, params=params)
        except FetchError:
            raise
        except httpx.RequestError as e:
            logger.error(
                f"Max retries exceeded for {self.source_name} request to {url}. Last exception: {e}"
            )
            raise FetchError(
                f"Failed request to {self.source_name} after multiple retries"
            ) from e
        return response.text

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.info(f"Closed HTTP client for {self.source_name}")
