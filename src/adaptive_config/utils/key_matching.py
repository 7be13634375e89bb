from __future__ import annotations

import re
from typing import Any, Callable, Mapping

from adaptive_config.utils.merge import is_mergeable
from adaptive_config.utils.schema import Shape, get_nested_shape

KeyMatcher = Callable[[str, str], bool]

DEFAULT_MAX_DEPTH = 150

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def _compare_by(selector: Callable[[str], str]) -> KeyMatcher:
    def matcher(shape_key: str, data_key: str) -> bool:
        return selector(shape_key) == selector(data_key)

    return matcher


def _alphanumeric_lower(key: str) -> str:
    return _NON_ALPHANUMERIC.sub("", key).lower()


KEY_MATCHERS: dict[str, KeyMatcher] = {
    "strict": _compare_by(lambda key: key),
    "lenient": _compare_by(_alphanumeric_lower),
}


def apply_key_matching(
    data: Mapping[str, Any],
    shape: Shape,
    key_matching: str,
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Mapping[str, Any]:
    """
    Return a copy of `data` whose keys are renamed to the first matching key in `shape`.

    Keys with no match are kept as is. Nested records are reshaped against the nested
    model's shape. Past `max_depth` the remaining subtree is returned untouched.
    """
    if key_matching == "strict" or not data or not shape or depth >= max_depth:
        return data

    matcher = KEY_MATCHERS.get(key_matching)
    if matcher is None:
        raise ValueError(f"Unsupported key matching: {key_matching}")

    result: dict[str, Any] = {}
    for key, value in data.items():
        matched_key = key
        if isinstance(key, str):
            matched_key = next((shape_key for shape_key in shape if matcher(shape_key, key)), key)

        nested_shape = get_nested_shape(shape.get(matched_key))
        if nested_shape is not None and is_mergeable(value):
            value = apply_key_matching(value, nested_shape, key_matching, depth + 1, max_depth)

        result[matched_key] = value
    return result
