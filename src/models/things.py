"""
Normalized Reddit "thing" types.

Reddit wraps every object in a ``{"kind": ..., "data": ...}`` envelope.
After normalization a thing is a read-only mapping of its payload fields,
and a Listing is a read-only sequence of its children. Everything else the
envelope carried (pagination cursors, the raw kind, ...) lives in
``metadata``, which never takes part in iteration or equality.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Optional


class ThingKind(str, Enum):
    """Semantic kind of a normalized thing."""

    LISTING = "listing"
    LINK = "link"
    COMMENT = "comment"
    SUBREDDIT = "subreddit"

    @classmethod
    def from_raw(cls, raw_kind: Any) -> Optional["ThingKind"]:
        """
        Map a raw envelope kind to a semantic kind.

        Returns:
            The matching ThingKind, or None for kinds that pass through
            normalization untouched (unknown tags, "more", absent kind)
        """
        return _RAW_KINDS.get(raw_kind) if isinstance(raw_kind, str) else None

    def __str__(self) -> str:
        return self.value


_RAW_KINDS = {
    "Listing": ThingKind.LISTING,
    "t1": ThingKind.COMMENT,
    "t3": ThingKind.LINK,
    "t5": ThingKind.SUBREDDIT,
}


def _frozen(fields: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(fields or {}))


class Thing(Mapping):
    """
    A normalized link, comment or subreddit.

    Behaves like a read-only dict of the thing's data fields, with
    ``"kind"`` set to its ThingKind. Envelope fields are in ``metadata``.

    Example:
        >>> link = Thing({"id": "abc", "kind": ThingKind.LINK}, {"kind": ThingKind.LINK})
        >>> link["id"]
        'abc'
        >>> link == {"id": "abc", "kind": "link"}
        True
    """

    __slots__ = ("_fields", "_metadata")

    def __init__(
        self,
        fields: Mapping[str, Any],
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._fields = _frozen(fields)
        self._metadata = _frozen(metadata)

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    @property
    def kind(self) -> Optional[ThingKind]:
        return self._metadata.get("kind")

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict:
        """Plain-dict copy of the payload, recursing into nested things."""
        return {k: _plain(v) for k, v in self._fields.items()}

    def __repr__(self) -> str:
        return f"Thing({dict(self._fields)!r})"


class Listing(Sequence):
    """
    One page of a paginated result, as an ordered sequence of children.

    ``before`` and ``after`` are the page's cursors (None at either end).
    """

    __slots__ = ("_items", "_metadata")

    kind = ThingKind.LISTING

    def __init__(
        self,
        items: Iterable[Any],
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._items = tuple(items)
        self._metadata = _frozen(metadata)

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    @property
    def before(self) -> Optional[str]:
        return self._metadata.get("before")

    @property
    def after(self) -> Optional[str]:
        return self._metadata.get("after")

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Listing, list, tuple)):
            return self._items == tuple(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_list(self) -> list:
        return [_plain(item) for item in self._items]

    def __repr__(self) -> str:
        return f"Listing({list(self._items)!r}, after={self.after!r})"


def _plain(value: Any) -> Any:
    if isinstance(value, Thing):
        return value.to_dict()
    if isinstance(value, Listing):
        return value.to_list()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, ThingKind):
        return value.value
    return value
