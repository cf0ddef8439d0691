"""
Custom exceptions for Reddit API integration.

Every error raised by the client derives from RedditAPIError so callers
can catch the whole family at once. Normalization and rate limiting never
raise; only the transport and pagination layers do.
"""

from typing import Any, Mapping, Optional


class RedditAPIError(Exception):
    """
    Base exception for all Reddit API related errors.

    This is the parent class for all Reddit-specific exceptions.
    Use this for catching any Reddit-related error.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize RedditAPIError.

        Args:
            message: Error description
            status_code: Optional HTTP status code from Reddit API
        """
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class RequestFailed(RedditAPIError):
    """
    Raised when a request to Reddit could not be completed.

    This occurs when:
    - The connection fails or times out
    - Reddit answers with a non-2xx status
    - The response body is not valid JSON

    Requests are never retried automatically; the original error is
    available as ``cause`` and as ``__cause__``.

    Example:
        >>> raise RequestFailed("r/python/new", {"params": {"limit": 100}}, exc)
    """

    def __init__(
        self,
        path: str,
        options: Optional[Mapping[str, Any]],
        cause: BaseException,
        status_code: Optional[int] = None,
    ) -> None:
        """
        Initialize RequestFailed.

        Args:
            path: Resource path that was requested
            options: Merged request options (method, params, headers)
            cause: Underlying transport or decoding error
            status_code: HTTP status, if a response was received
        """
        self.path = path
        self.options = options
        self.cause = cause

        detail = f"HTTP {status_code}" if status_code is not None else str(cause)
        super().__init__(
            f"Request for '{path}' failed: {detail}",
            status_code=status_code,
        )


class NotAListing(RedditAPIError):
    """
    Raised when a paginated resource did not return a Listing.

    Pagination only follows cursors found on Listings, so any other shape
    is fatal to that pagination rather than being coerced.
    """

    def __init__(self, obj: Any, path: Optional[str] = None) -> None:
        """
        Initialize NotAListing.

        Args:
            obj: The normalized value that was returned instead
            path: Resource path that produced it
        """
        self.obj = obj
        self.path = path

        where = f" for '{path}'" if path else ""
        super().__init__(f"Expected a Listing{where}, got {type(obj).__name__}")
