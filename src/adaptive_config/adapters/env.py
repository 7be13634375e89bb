from __future__ import annotations

from typing import Any, Mapping, Optional

from adaptive_config.models import Adapter, KeyMatching, Transform
from adaptive_config.utils.filtering import Regex, filtered_data, get_safe_environ

ADAPTER_NAME = "env adapter"


def env_adapter(
    *,
    custom_env: Optional[Mapping[str, Any]] = None,
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    """
    Read environment variables, or `custom_env` when given.

    The source is copied on every read so later changes to it never leak into a
    record that was already returned.
    """

    def read() -> dict[str, Any]:
        data = dict(custom_env) if custom_env is not None else get_safe_environ()
        return filtered_data(data, regex=regex)

    return Adapter(
        name=ADAPTER_NAME,
        read=read,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )
