from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Mapping, Optional, Sequence, Type, Union

from pydantic import BaseModel, ValidationError

from adaptive_config.interfaces import Logger, SupportsRead

KeyMatching = Literal["strict", "lenient"]
ConfigRecord = dict[str, Any]
ReadResult = Union[Mapping[str, Any], Awaitable[Mapping[str, Any]], None]


@dataclass(frozen=True, slots=True)
class ConfigEntry:
    """A single top-level key/value pair handed to a transform function."""

    key: str
    value: Any


Transform = Callable[[ConfigEntry], Union[ConfigEntry, Mapping[str, Any], Literal[False]]]


@dataclass(frozen=True, slots=True)
class Adapter:
    """
    A named source of configuration data.

    `read` is called once per load and returns a mapping, or an awaitable of one for
    asynchronous sources. Every other field left as None falls back to the value set
    on the Config passed to the loader.
    """

    name: str
    read: Callable[[], ReadResult]
    silent: Optional[bool] = None
    key_matching: Optional[KeyMatching] = None
    transform: Optional[Transform] = None
    nesting_separator: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ResolvedAdapterConfig:
    key_matching: KeyMatching
    silent: bool
    transform: Optional[Transform]
    nesting_separator: Optional[str]


@dataclass(frozen=True, slots=True)
class Config:
    """
    Inputs for load_config / load_config_sync.

    With no adapters the loader validates a snapshot of the process environment.
    """

    schema: Type[BaseModel]
    adapters: Union[SupportsRead, Sequence[SupportsRead], None] = None
    on_success: Optional[Callable[[BaseModel], None]] = None
    on_error: Optional[Callable[[ValidationError], None]] = None
    logger: Optional[Logger] = None
    key_matching: Optional[KeyMatching] = None
    silent: Optional[bool] = None
    transform: Optional[Transform] = None
