"""
Reddit API client for the public ``.json`` endpoints.

Appending ``.json`` to any reddit.com path returns the page as a "thing"
tree, with no authentication required. RedditClient wraps an
httpx.AsyncClient, spaces requests through the shared rate limiter and
hands back raw or normalized JSON.
"""

import time
from typing import Any, Dict, Mapping, Optional

import httpx
import structlog

from src.config import Settings
from src.reddit import pager
from src.reddit.exceptions import RequestFailed
from src.reddit.normalizer import normalize
from src.reddit.options import Options, merge_options
from src.reddit.rate_limiter import IntervalRateLimiter, rate_limiter as shared_rate_limiter
from src.utils.logger import log_request

logger = structlog.get_logger(__name__)


class RedditClient:
    """
    Async client for Reddit's public JSON API.

    Each call to request() makes exactly one HTTP request, after waiting
    on the rate limiter. Failures are raised as RequestFailed and are never
    retried.

    Example:
        >>> async with RedditClient() as client:
        ...     page = await client.request_normalized("r/python/new")
        ...     async for link in client.paginate("r/python/new"):
        ...         print(link["title"])
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rate_limiter: Optional[IntervalRateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize RedditClient.

        Args:
            settings: Client configuration (default: Settings.from_env())
            rate_limiter: Limiter to wait on (default: the process-wide one,
                or a dedicated one if settings ask for a different interval)
            transport: httpx transport override, e.g. httpx.MockTransport
        """
        self.settings = settings or Settings.from_env()
        self.rate_limiter = rate_limiter or self._default_limiter()
        self.defaults: Options = {
            "method": "GET",
            "headers": {
                "User-Agent": self.settings.user_agent,
                "Accept": "application/json",
            },
        }
        self._http = httpx.AsyncClient(
            transport=transport,
            timeout=self.settings.timeout_seconds,
            follow_redirects=True,
        )

    def _default_limiter(self) -> IntervalRateLimiter:
        interval = self.settings.min_interval_ms
        if interval == shared_rate_limiter.min_interval_ms:
            return shared_rate_limiter
        logger.warning(
            "dedicated_rate_limiter",
            min_interval_ms=interval,
            shared_min_interval_ms=shared_rate_limiter.min_interval_ms,
        )
        return IntervalRateLimiter(min_interval_ms=interval)

    def url_for(self, path: str) -> str:
        return f"{self.settings.base_url}/{path.strip('/')}.json"

    async def request(self, path: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Fetch ``{base_url}/{path}.json`` and return the decoded body.

        Args:
            path: Resource path, e.g. "r/python/new" or "by_id/t3_abc"
            options: Overrides for method, params, headers and timeout

        Returns:
            Decoded JSON, not normalized

        Raises:
            RequestFailed: On transport errors, non-2xx status or a body
                that is not JSON
        """
        merged = merge_options(self.defaults, options)

        await self.rate_limiter.acquire()

        logger.info("reddit_request", path=path, params=merged.get("params"))

        kwargs: Dict[str, Any] = {
            "params": merged.get("params"),
            "headers": merged.get("headers"),
        }
        if "timeout" in merged:
            kwargs["timeout"] = merged["timeout"]

        status_code: Optional[int] = None
        start = time.perf_counter()
        try:
            response = await self._http.request(merged["method"], self.url_for(path), **kwargs)
            status_code = response.status_code
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log_request(
                path=path,
                duration_ms=(time.perf_counter() - start) * 1000,
                status_code=status_code,
                error=str(e) or type(e).__name__,
            )
            raise RequestFailed(path, merged, e, status_code=status_code) from e

        log_request(
            path=path,
            duration_ms=(time.perf_counter() - start) * 1000,
            status_code=status_code,
        )
        return body

    async def request_normalized(
        self, path: str, options: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Request as with request(), then normalize the things in the response."""
        return normalize(await self.request(path, options))

    def paginate(
        self, path: str, options: Optional[Mapping[str, Any]] = None
    ) -> "pager.ListingPager":
        """Lazily iterate every item of the listing at ``path``. See pager.paginate()."""
        return pager.paginate(self, path, options)

    async def fetch_by_id(self, thing_id: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch a thing by its fullname, e.g. "t3_abc123". See pager.fetch_by_id()."""
        return await pager.fetch_by_id(self, thing_id, options)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "RedditClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
