"""
Reddit API integration layer over the public ``.json`` endpoints.

This module provides the complete Reddit API integration including:
- RedditClient: rate-limited async HTTP client
- Custom exception hierarchy for error handling
- Thing normalization (Listing/link/comment/subreddit envelopes)
- Rate limiting (IntervalRateLimiter)
- Cursor-following pagination (ListingPager)

Example:
    >>> from src.reddit import RedditClient
    >>> async with RedditClient() as client:
    ...     links = await client.paginate("r/python/new").take(250)
"""

from src.reddit.exceptions import (
    RedditAPIError,
    RequestFailed,
    NotAListing,
)
from src.reddit.normalizer import (
    ResponseNormalizer,
    normalizer,
    normalize,
)
from src.reddit.rate_limiter import IntervalRateLimiter, rate_limiter
from src.reddit.options import merge_options
from src.reddit.pager import ListingPager, PagerState, paginate, fetch_by_id
from src.reddit.client import RedditClient

__all__ = [
    # Client
    "RedditClient",
    "merge_options",
    # Exceptions
    "RedditAPIError",
    "RequestFailed",
    "NotAListing",
    # Normalizers
    "ResponseNormalizer",
    "normalizer",
    "normalize",
    # Rate limiting
    "IntervalRateLimiter",
    "rate_limiter",
    # Pagination
    "ListingPager",
    "PagerState",
    "paginate",
    "fetch_by_id",
]
