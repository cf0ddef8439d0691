"""
Hour-of-day posting frequencies for a listing.

A small consumer of the pager: how are the newest N items of a listing
spread over the hours of the day?
"""

import math
from collections import Counter
from datetime import datetime, tzinfo
from typing import Any, AsyncIterable, Iterable, Mapping, Optional, Union

import structlog

logger = structlog.get_logger(__name__)

Items = Union[AsyncIterable[Mapping[str, Any]], Iterable[Mapping[str, Any]]]


def created_hour(item: Mapping[str, Any], tz: Optional[tzinfo] = None) -> Optional[int]:
    """
    Hour (0-23) of an item's ``created_utc``, in ``tz`` or local time.

    Returns None for items without a timestamp, such as raw "more" stubs.
    """
    created = item.get("created_utc") if isinstance(item, Mapping) else None
    if created is None:
        return None
    return datetime.fromtimestamp(int(created), tz=tz).hour


async def hour_frequencies(items: Items, amount: int, tz: Optional[tzinfo] = None) -> Counter:
    """
    Count the creation hour of the first ``amount`` items.

    Items without ``created_utc`` use up their place among the first
    ``amount`` but are not counted.

    Args:
        items: A ListingPager (or any async/sync iterable of things)
        amount: How many items to look at
        tz: Time zone for the hours (default: local time)

    Returns:
        Counter mapping hour -> number of items
    """
    freqs: Counter = Counter()
    if amount <= 0:
        return freqs

    seen = 0
    skipped = 0

    def count(item: Any) -> bool:
        nonlocal seen, skipped
        hour = created_hour(item, tz)
        if hour is None:
            skipped += 1
        else:
            freqs[hour] += 1
        seen += 1
        return seen >= amount

    if hasattr(items, "__aiter__"):
        async for item in items:
            if count(item):
                break
    else:
        for item in items:
            if count(item):
                break

    logger.debug("hour_frequencies_counted", items=seen, skipped=skipped, hours=len(freqs))
    return freqs


def format_hour_histogram(freqs: Mapping[int, int], width: int = 30) -> str:
    """
    Render hour frequencies as a text histogram, one line per hour.

    The most frequent hour gets ``width`` stars; other bars are scaled to
    it and rounded up.

    Example:
        >>> print(format_hour_histogram({9: 2, 14: 4}, width=4))
         9 **
        14 ****
    """
    if not freqs:
        return ""
    peak = max(freqs.values())
    lines = []
    for hour, count in sorted(freqs.items()):
        bar = "*" * math.ceil(width * count / peak) if peak else ""
        lines.append(f"{hour:>2} {bar}")
    return "\n".join(lines)
