"""
Directory adapter: environment-aware discovery of configuration files.

Files are picked by basename (default, deployment, hostname, local and their
instance variants) and extension, then merged from lowest to highest precedence.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
from typing import Any, Awaitable, Callable, Generator, Mapping, Optional, Sequence, Union

from adaptive_config.adapters.directory.filenames import get_allowed_filenames
from adaptive_config.adapters.directory.resolution import (
    ConfigResolutionResult,
    resolve_config_files,
    sort_config_resolution_results,
)
from adaptive_config.adapters.directory.specifiers import (
    AdapterFactory,
    AdapterSpecifier,
    get_extension_to_adapter_factory_map,
)
from adaptive_config.adapters.directory.variables import (
    ConfigResolutionVariables,
    resolve_config_resolution_variables,
)
from adaptive_config.errors import AdapterReadError, DirectoryReadError
from adaptive_config.interfaces import SupportsRead
from adaptive_config.models import Adapter, KeyMatching, Transform
from adaptive_config.utils.filtering import Regex, filtered_data
from adaptive_config.utils.merge import deep_merge

logger = logging.getLogger(__name__)

ADAPTER_NAME = "directory adapter"

PathArg = Union[str, os.PathLike]


def directory_adapter(
    *,
    paths: Union[PathArg, Sequence[PathArg]],
    adapters: Union[AdapterSpecifier, Sequence[AdapterSpecifier]],
    regex: Optional[Regex] = None,
    environ: Optional[Mapping[str, str]] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    """
    Build an adapter over one or more configuration directories.

    `environ` supplies the deployment, instance and host variables; it defaults to a
    snapshot of os.environ taken on each read. Reading stays synchronous unless a
    per-file adapter returns an awaitable.
    """
    factory_map = get_extension_to_adapter_factory_map(
        [adapters] if isinstance(adapters, AdapterSpecifier) else list(adapters)
    )
    if isinstance(paths, (str, os.PathLike)):
        dir_paths = [os.fspath(paths)]
    else:
        dir_paths = [os.fspath(path) for path in paths]

    def _directory_error(exc: Exception) -> DirectoryReadError:
        listing = "\n - ".join(dir_paths)
        return DirectoryReadError(
            f"Failed to read config from some of the following directories:\n - {listing}\nReason: {exc}"
        )

    def _finish(records: Sequence[Any]) -> Any:
        merged = deep_merge({}, *(record for record in records if record is not None))
        return filtered_data(merged, regex=regex)

    async def _finish_async(pending: Sequence[tuple[ConfigResolutionResult, SupportsRead, Any]]) -> Any:
        outcomes = await asyncio.gather(
            *(_await_file(result, adapter, data) for result, adapter, data in pending),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, Exception):
                raise _directory_error(outcome) from outcome
            if isinstance(outcome, BaseException):
                raise outcome
        try:
            return _finish(outcomes)
        except Exception as exc:
            raise _directory_error(exc) from exc

    def read() -> Any:
        try:
            pending = _read_files(dir_paths, factory_map, resolve_config_resolution_variables(environ))
            if any(inspect.isawaitable(data) for _, _, data in pending):
                return _PendingDirectoryRead(pending, _finish_async)
            return _finish([data for _, _, data in pending])
        except Exception as exc:
            raise _directory_error(exc) from exc

    return Adapter(
        name=ADAPTER_NAME,
        read=read,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )


def _read_files(
    dir_paths: Sequence[str],
    factory_map: Mapping[str, AdapterFactory],
    variables: ConfigResolutionVariables,
) -> list[tuple[ConfigResolutionResult, SupportsRead, Any]]:
    allowed_filenames = get_allowed_filenames(variables)
    results = sort_config_resolution_results(
        resolve_config_files(dir_paths, allowed_filenames, factory_map.keys()),
        allowed_filenames,
        dir_paths,
    )
    logger.debug(
        "Resolved configuration files. deployment=%s instance=%s files=%s",
        variables.deployment_name,
        variables.instance_name,
        [result.path for result in results],
    )

    pending: list[tuple[ConfigResolutionResult, SupportsRead, Any]] = []
    try:
        for result in results:
            adapter = factory_map[result.ext](result.path)
            try:
                data = adapter.read()
            except Exception as exc:
                raise AdapterReadError(f"Cannot read data from {adapter.name} for {result.path}: {exc}") from exc
            pending.append((result, adapter, data))
    except Exception:
        for _, _, data in pending:
            if inspect.iscoroutine(data):
                data.close()
        raise
    return pending


class _PendingDirectoryRead:
    """Awaitable result of a directory read with asynchronous per-file adapters.

    `close()` discards the per-file reads without awaiting them.
    """

    def __init__(
        self,
        pending: Sequence[tuple[ConfigResolutionResult, SupportsRead, Any]],
        finish: Callable[[Sequence[tuple[ConfigResolutionResult, SupportsRead, Any]]], Awaitable[Any]],
    ) -> None:
        self._pending = pending
        self._finish = finish
        self._started = False

    def __await__(self) -> Generator[Any, None, Any]:
        self._started = True
        return self._finish(self._pending).__await__()

    def close(self) -> None:
        if self._started:
            return
        self._started = True
        for _, _, data in self._pending:
            if inspect.iscoroutine(data):
                data.close()


async def _await_file(result: ConfigResolutionResult, adapter: SupportsRead, data: Any) -> Any:
    if not inspect.isawaitable(data):
        return data
    try:
        return await data
    except Exception as exc:
        raise AdapterReadError(f"Cannot read data from {adapter.name} for {result.path}: {exc}") from exc


__all__ = [
    "AdapterFactory",
    "AdapterSpecifier",
    "ConfigResolutionResult",
    "ConfigResolutionVariables",
    "directory_adapter",
]
