from __future__ import annotations

import os
import re
from typing import Any, Optional, Pattern, Union

from adaptive_config.utils.merge import is_mergeable

Regex = Union[str, Pattern[str]]


def filter_by_regex(data: Any, regex: Regex) -> dict[str, Any]:
    """Keep the top-level keys of `data` that `regex` matches anywhere (re.search)."""
    if data is None:
        return {}
    if not is_mergeable(data):
        raise TypeError(f"Cannot filter {data!r} by regex as it is not a record-like object")

    pattern = re.compile(regex) if isinstance(regex, str) else regex
    return {key: value for key, value in data.items() if pattern.search(str(key))}


def filtered_data(data: Any, *, regex: Optional[Regex] = None) -> Any:
    if regex is not None:
        return filter_by_regex(data, regex)
    return data


def get_safe_environ() -> dict[str, str]:
    """Return a detached copy of the process environment."""
    return dict(os.environ)
