"""
Request option merging.

Options are plain dicts with the keys ``method``, ``params`` (query
string), ``headers`` and ``timeout``. Callers layer their own options over
the client's defaults and over per-page pagination parameters.
"""

import copy
from typing import Any, Dict, Mapping, Optional

Options = Dict[str, Any]


def merge_options(*layers: Optional[Mapping[str, Any]]) -> Options:
    """
    Merge request option dicts, later layers winning.

    Nested dicts (``params``, ``headers``) are merged key by key rather
    than replaced, at any depth. ``None`` layers are skipped. The inputs
    are never modified.

    Example:
        >>> merge_options({"params": {"limit": 100}}, {"params": {"t": "week"}})
        {'params': {'limit': 100, 't': 'week'}}
    """
    merged: Options = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                merged[key] = merge_options(current, value)
            elif isinstance(value, Mapping):
                merged[key] = merge_options(value)
            else:
                merged[key] = copy.copy(value)
    return merged
