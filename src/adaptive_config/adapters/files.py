from __future__ import annotations

import io
import json
import os
import tomllib
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import json5
import yaml
from dotenv import dotenv_values

from adaptive_config.errors import AdapterReadError
from adaptive_config.models import Adapter, KeyMatching, Transform
from adaptive_config.utils.filtering import Regex, filtered_data

PathLike = Union[str, os.PathLike]


def _parse_dotenv(raw: str) -> dict[str, Optional[str]]:
    return dict(dotenv_values(stream=io.StringIO(raw)))


def _file_adapter(
    *,
    name: str,
    format_name: str,
    parse: Callable[[str], Any],
    path: PathLike,
    regex: Optional[Regex],
    silent: Optional[bool],
    key_matching: Optional[KeyMatching],
    transform: Optional[Transform],
    nesting_separator: Optional[str],
) -> Adapter:
    def read() -> dict[str, Any]:
        try:
            raw = Path(path).read_text(encoding="utf-8")
            data = parse(raw)
            if data is None:
                return {}
            if not isinstance(data, Mapping):
                raise ValueError(f"Top-level {format_name} must be a mapping, got: {type(data).__name__}")
            return filtered_data(dict(data), regex=regex)
        except Exception as exc:
            raise AdapterReadError(f"Failed to parse / read {format_name} file at {path}: {exc}") from exc

    return Adapter(
        name=name,
        read=read,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )


def json_adapter(
    *,
    path: PathLike,
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    return _file_adapter(
        name="json adapter",
        format_name="JSON",
        parse=json.loads,
        path=path,
        regex=regex,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )


def json5_adapter(
    *,
    path: PathLike,
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    return _file_adapter(
        name="json5 adapter",
        format_name="JSON5",
        parse=json5.loads,
        path=path,
        regex=regex,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )


def yaml_adapter(
    *,
    path: PathLike,
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    return _file_adapter(
        name="yaml adapter",
        format_name="YAML",
        parse=yaml.safe_load,
        path=path,
        regex=regex,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )


def toml_adapter(
    *,
    path: PathLike,
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    return _file_adapter(
        name="toml adapter",
        format_name="TOML",
        parse=tomllib.loads,
        path=path,
        regex=regex,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )


def dotenv_adapter(
    *,
    path: PathLike,
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    """Parse a .env file without touching os.environ."""
    return _file_adapter(
        name="dotenv adapter",
        format_name=".env",
        parse=_parse_dotenv,
        path=path,
        regex=regex,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )
