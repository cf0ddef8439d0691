"""
Cursor-following pagination over Reddit listings.

A Reddit listing page carries at most 100 items plus an ``after`` cursor
naming the last of them. ListingPager walks those cursors, presenting all
pages as one async iterator that only fetches a page when the consumer
asks for an item on it.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, List, Mapping, Optional

import structlog

from src.models.things import Listing
from src.reddit.exceptions import NotAListing
from src.reddit.options import Options, merge_options

if TYPE_CHECKING:
    from src.reddit.client import RedditClient

logger = structlog.get_logger(__name__)


class PagerState(Enum):
    PENDING = "pending"  # nothing fetched yet
    HOLDING = "holding"  # serving items from the current page
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class ListingPager:
    """
    Async iterator over every item of a paginated listing.

    The first page is requested on the first ``__anext__``; each following
    page only once the previous one has been fully consumed and only if it
    had an ``after`` cursor. Items come out in the order Reddit returned
    them. A pager cannot be rewound: call paginate() again to start over,
    which re-fetches from the first page.

    If a page request fails (or the resource is not a listing) the error is
    raised to the consumer at that point and again on any later
    ``__anext__``. Items yielded before the failure are unaffected.

    Example:
        >>> pager = paginate(client, "r/python/new")
        >>> async for link in pager:
        ...     print(link["title"])
        >>> first_50 = await paginate(client, "r/python/new").take(50)
    """

    def __init__(
        self,
        client: "RedditClient",
        path: str,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.client = client
        self.path = path
        self.options = merge_options(options)
        self.page_limit = client.settings.page_limit
        self.pages_fetched = 0

        self.state = PagerState.PENDING
        self._page: Listing = Listing(())
        self._index = 0
        self._error: Optional[BaseException] = None

    def page_options(self, after: Optional[str] = None) -> Options:
        """
        Options for one page request.

        The caller's options override ``limit``, but the cursor returned by
        the previous page always wins over a caller-supplied ``after``.
        """
        if after is None:
            return merge_options({"params": {"limit": self.page_limit}}, self.options)
        return merge_options(
            {"params": {"after": after, "limit": self.page_limit}},
            self.options,
            {"params": {"after": after}},
        )

    async def _fetch(self, after: Optional[str]) -> None:
        try:
            page = await self.client.request_normalized(self.path, self.page_options(after))
            self.pages_fetched += 1
            if not isinstance(page, Listing):
                logger.error("not_a_listing", path=self.path, got=type(page).__name__)
                raise NotAListing(page, path=self.path)
        except Exception as e:
            self.state = PagerState.FAILED
            self._error = e
            raise

        logger.debug(
            "listing_page_fetched",
            path=self.path,
            page=self.pages_fetched,
            items=len(page),
            after=page.after,
        )
        self._page = page
        self._index = 0
        self.state = PagerState.HOLDING

    def __aiter__(self) -> "ListingPager":
        return self

    async def __anext__(self) -> Any:
        while True:
            if self.state is PagerState.FAILED:
                raise self._error
            if self.state is PagerState.EXHAUSTED:
                raise StopAsyncIteration

            if self.state is PagerState.PENDING:
                await self._fetch(after=None)
                continue

            if self._index < len(self._page):
                item = self._page[self._index]
                self._index += 1
                return item

            if self._page.after is None:
                self.state = PagerState.EXHAUSTED
                logger.debug("listing_exhausted", path=self.path, pages=self.pages_fetched)
                continue

            await self._fetch(after=self._page.after)

    async def take(self, amount: int) -> List[Any]:
        """
        Collect up to ``amount`` items.

        Stops as soon as ``amount`` items are collected, so no page beyond
        the one holding the last of them is requested.
        """
        items: List[Any] = []
        if amount <= 0:
            return items
        async for item in self:
            items.append(item)
            if len(items) >= amount:
                break
        return items


def paginate(
    client: "RedditClient",
    path: str,
    options: Optional[Mapping[str, Any]] = None,
) -> ListingPager:
    """
    A lazy sequence of all the items on the listing at ``path``.

    Args:
        client: Client used for every page request
        path: Listing path, e.g. "r/gaming" or "r/python/top"
        options: Extra request options, e.g. {"params": {"t": "week"}}

    Returns:
        ListingPager; nothing is requested until it is iterated

    Example:
        >>> links = await paginate(client, "r/gaming").take(50)
    """
    return ListingPager(client, path, options)


async def fetch_by_id(
    client: "RedditClient",
    thing_id: str,
    options: Optional[Mapping[str, Any]] = None,
) -> Any:
    """
    Get a thing by its fullname (e.g. "t3_abc123").

    The response is normalized but not paginated. Reddit answers
    ``by_id`` with a Listing of the requested things.
    """
    return await client.request_normalized(f"by_id/{thing_id}", options)
