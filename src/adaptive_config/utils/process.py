from __future__ import annotations

from typing import Any, Mapping, Optional

from adaptive_config.models import Transform
from adaptive_config.utils.key_matching import apply_key_matching
from adaptive_config.utils.schema import get_shape
from adaptive_config.utils.transformation import apply_data_transformation


def process_adapter_data(
    data: Mapping[str, Any],
    schema: Any,
    key_matching: str,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Mapping[str, Any]:
    transformed = apply_data_transformation(data, transform, nesting_separator)
    if key_matching == "strict":
        return transformed

    shape = get_shape(schema)
    if not shape:
        return transformed
    return apply_key_matching(transformed, shape, key_matching)
