"""Download client for remote reference tables.

Wraps a requests session (optionally a requests-cache SQLite session) with a
tenacity retry policy. The default policy is a single attempt: a table that
cannot be fetched aborts the run rather than producing partial annotations.
"""

import logging
from pathlib import Path

import requests
import requests_cache
from requests.exceptions import ConnectionError, HTTPError, Timeout
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from phagelink.config.schema import PipelineConfig

logger = logging.getLogger(__name__)

# Errors worth another attempt when max_retries > 1
TRANSIENT_ERRORS = (HTTPError, Timeout, ConnectionError)


class CachedAPIClient:
    """
    HTTP client used to download reference tables such as the INPHARED
    phage metadata.

    Attributes:
        cache_dir: Directory holding the ``http_cache.sqlite`` file
        max_retries: Total attempts per request (1 = no retry)
        timeout: Per-request timeout in seconds
        use_cache: Whether responses are persisted between runs
        session: requests_cache.CachedSession or plain requests.Session
    """

    def __init__(
        self,
        cache_dir: Path,
        max_retries: int = 1,
        cache_ttl: int = 86400,
        timeout: int = 60,
        use_cache: bool = True,
    ):
        """
        Args:
            cache_dir: Directory for SQLite cache storage
            max_retries: Total attempts per request
            cache_ttl: Seconds a cached table stays fresh (0 = never expires)
            timeout: Request timeout in seconds
            use_cache: If False, use a plain session and never touch cache_dir
        """
        self.cache_dir = Path(cache_dir)
        self.max_retries = max_retries
        self.timeout = timeout
        self.use_cache = use_cache
        self.session = self._build_session(cache_ttl)

    def _build_session(self, cache_ttl: int) -> requests.Session:
        if not self.use_cache:
            return requests.Session()

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        return requests_cache.CachedSession(
            cache_name=str(self.cache_dir / "http_cache"),
            backend="sqlite",
            expire_after=cache_ttl if cache_ttl > 0 else None,
        )

    def _retrying(self):
        return retry(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=60),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        )

    def get(self, url: str, **kwargs) -> requests.Response:
        """
        GET ``url`` under the retry policy.

        Raises:
            HTTPError: On a non-2xx status once attempts are exhausted
            Timeout: On timeout once attempts are exhausted
            ConnectionError: When the host is unreachable once attempts are exhausted
        """
        @self._retrying()
        def _attempt() -> requests.Response:
            response = self.session.get(url, timeout=self.timeout, **kwargs)
            if not 200 <= response.status_code < 300:
                logger.warning(f"Download of {url} returned HTTP {response.status_code}")
            response.raise_for_status()
            return response

        response = _attempt()
        if getattr(response, "from_cache", False):
            logger.info(f"Using cached copy of {url}")
        return response

    def get_text(self, url: str, **kwargs) -> str:
        """Download ``url`` and return the decoded body."""
        text = self.get(url, **kwargs).text
        logger.info(f"Downloaded {url} ({len(text)} characters)")
        return text

    @classmethod
    def from_config(cls, config: PipelineConfig) -> "CachedAPIClient":
        """Create a client from the ``cache_dir`` and ``api`` settings."""
        return cls(
            cache_dir=config.cache_dir,
            max_retries=config.api.max_retries,
            cache_ttl=config.api.cache_ttl_seconds,
            timeout=config.api.timeout_seconds,
            use_cache=config.api.use_cache,
        )
