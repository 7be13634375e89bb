from __future__ import annotations

from typing import Any, Callable, Optional, Protocol


class Logger(Protocol):
    def warning(self, message: str) -> None:
        ...


class SupportsRead(Protocol):
    """
    Duck-typed adapter contract.

    `Adapter` implements it; custom sources only need the same attributes.
    """

    name: str
    read: Callable[[], Any]
    silent: Optional[bool]
    key_matching: Optional[str]
    transform: Optional[Callable[..., Any]]
    nesting_separator: Optional[str]
