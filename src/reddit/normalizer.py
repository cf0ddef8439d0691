"""
Response normalization for Reddit API data.

Reddit returns every object as a "thing" envelope
(https://github.com/reddit-archive/reddit/wiki/JSON). This module rewrites a
decoded JSON tree so that:

- a ``Listing`` becomes a Listing sequence of its children, with the
  envelope and cursor fields moved to metadata;
- ``t3``/``t1``/``t5`` things become Thing mappings of their data fields,
  tagged with ``kind`` link/comment/subreddit;
- everything else, including unknown kinds, is left as it is.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from src.models.things import Listing, Thing, ThingKind


class ResponseNormalizer:
    """
    Normalizer for decoded Reddit JSON.

    The tree is walked postorder, so nested things (comment replies,
    listings inside links) are already normalized by the time their parent
    envelope is unwrapped.

    All normalization methods are static and can be called without
    instantiation.

    Example:
        >>> raw = {"kind": "t3", "data": {"id": "abc"}}
        >>> ResponseNormalizer.normalize(raw)
        Thing({'id': 'abc', 'kind': <ThingKind.LINK: 'link'>})
    """

    @staticmethod
    def normalize(value: Any) -> Any:
        """
        Normalize a decoded JSON value of any depth.

        Never raises: shapes that are not recognized things are returned
        with only their contents normalized.

        Args:
            value: Decoded JSON (dict, list, scalar) or an already
                normalized Thing/Listing

        Returns:
            The normalized value
        """
        if isinstance(value, dict):
            walked = {k: ResponseNormalizer.normalize(v) for k, v in value.items()}
            return ResponseNormalizer.unwrap(walked)
        if isinstance(value, (list, tuple)):
            return type(value)(ResponseNormalizer.normalize(v) for v in value)
        return value

    @staticmethod
    def unwrap(obj: Dict[str, Any]) -> Any:
        """
        Unwrap a single envelope whose contents are already normalized.

        Args:
            obj: Dictionary that may be a thing envelope

        Returns:
            Listing, Thing, or ``obj`` itself if its kind is not recognized
        """
        kind = ThingKind.from_raw(obj.get("kind"))
        if kind is None:
            return obj
        return _UNWRAPPERS[kind](obj, kind)

    @staticmethod
    def unwrap_listing(obj: Dict[str, Any], kind: ThingKind = ThingKind.LISTING) -> Listing:
        data = _as_dict(obj.get("data"))
        metadata = {k: v for k, v in obj.items() if k != "data"}
        metadata.update((k, v) for k, v in data.items() if k != "children")
        metadata["kind"] = kind
        return Listing(data.get("children") or (), metadata)

    @staticmethod
    def unwrap_thing(obj: Dict[str, Any], kind: ThingKind) -> Thing:
        fields = dict(_as_dict(obj.get("data")))
        fields["kind"] = kind
        metadata = {k: v for k, v in obj.items() if k != "data"}
        metadata["kind"] = kind
        return Thing(fields, metadata)


def _as_dict(value: Optional[Any]) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


_UNWRAPPERS: Dict[ThingKind, Callable[[Dict[str, Any], ThingKind], Any]] = {
    ThingKind.LISTING: ResponseNormalizer.unwrap_listing,
    ThingKind.LINK: ResponseNormalizer.unwrap_thing,
    ThingKind.COMMENT: ResponseNormalizer.unwrap_thing,
    ThingKind.SUBREDDIT: ResponseNormalizer.unwrap_thing,
}


# Create singleton instance for convenient import
normalizer = ResponseNormalizer()


def normalize(value: Any) -> Any:
    """
    Normalize decoded Reddit JSON.

    Convenience function that calls ResponseNormalizer.normalize().

    Example:
        >>> from src.reddit.normalizer import normalize
        >>> page = normalize(raw_listing)
        >>> page.after
        't3_abc123'
    """
    return ResponseNormalizer.normalize(value)
