from __future__ import annotations

from typing import Any, Mapping, Optional

from adaptive_config.errors import NestedKeyConflictError, TransformError
from adaptive_config.models import ConfigEntry, Transform
from adaptive_config.utils.merge import deep_merge, is_mergeable


def apply_data_transformation(
    data: Mapping[str, Any],
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Mapping[str, Any]:
    """
    Run `transform` over every top-level entry, then expand keys on `nesting_separator`.

    Returns `data` itself when neither is given.
    """
    if transform is None and not nesting_separator:
        return data

    result: dict[str, Any] = {}
    for key, value in data.items():
        if transform is not None:
            transformed = transform(ConfigEntry(key=key, value=value))
            if transformed is False:
                continue
            key, value = _unpack_entry(key, transformed)

        if nesting_separator:
            apply_nesting_separator(result, key, value, nesting_separator)
        else:
            result[key] = value
    return result


def _unpack_entry(key: str, transformed: Any) -> tuple[str, Any]:
    if isinstance(transformed, Mapping):
        if "key" in transformed and "value" in transformed:
            return transformed["key"], transformed["value"]
    elif hasattr(transformed, "key") and hasattr(transformed, "value"):
        return transformed.key, transformed.value
    raise TransformError(
        f'Invalid transform result for key "{key}": expected ConfigEntry(key, value), '
        f'a mapping with "key" and "value", or False, received: {transformed!r}'
    )


def apply_nesting_separator(acc: dict[str, Any], key: str, value: Any, separator: str) -> None:
    """Assign `value` into `acc` at the path obtained by splitting `key` on `separator`."""
    if not separator:
        acc[key] = value
        return

    parts = key.split(separator)
    current = acc
    for index, part in enumerate(parts):
        path = separator.join(parts[: index + 1])

        if index == len(parts) - 1:
            if isinstance(current.get(part), dict):
                raise NestedKeyConflictError(
                    f'Nested key conflict: "{key}" cannot be assigned because "{path}" '
                    "already exists as an object (created by another key)"
                )
            # Copy records so later keys never write into the caller's data.
            current[part] = deep_merge({}, value) if is_mergeable(value) else value
            continue

        if part in current:
            if not isinstance(current[part], dict):
                raise NestedKeyConflictError(
                    f'Nested key conflict: Cannot create nested object at "{path}" because it '
                    f'already exists as a primitive value. Conflicting key: "{key}" and "{path}"'
                )
        else:
            current[part] = {}
        current = current[part]
