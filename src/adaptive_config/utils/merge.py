from __future__ import annotations

from typing import Any


class _Missing:
    """Marker for a value that is absent, as opposed to an explicit None."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_mergeable(item: object) -> bool:
    """
    Return True when `item` is a plain record that deep_merge may recurse into.

    Only exact dicts qualify. Subclasses, lists, tuples, sets and class instances
    are replaced wholesale.
    """
    return type(item) is dict


def deep_merge(target: dict[str, Any], *sources: Any) -> dict[str, Any]:
    """
    Merge `sources` into `target` from left to right and return `target`.

    - MISSING values are skipped.
    - Non-record values (None and lists included) replace whatever was there.
    - Records are copied into the target, never aliased.
    """
    if not is_mergeable(target):
        return target
    for source in sources:
        if not is_mergeable(source):
            continue
        _merge_record(target, source)
    return target


def _merge_record(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        if value is MISSING:
            continue
        if not is_mergeable(value):
            target[key] = value
            continue
        existing = target.get(key)
        if not is_mergeable(existing):
            target[key] = deep_merge({}, value)
            continue
        _merge_record(existing, value)
