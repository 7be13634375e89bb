from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ValidationError

from adaptive_config.errors import AdapterReadError, SyncAdapterError
from adaptive_config.interfaces import Logger, SupportsRead
from adaptive_config.models import Config, ConfigRecord, KeyMatching, ResolvedAdapterConfig, Transform
from adaptive_config.utils.filtering import get_safe_environ
from adaptive_config.utils.merge import deep_merge
from adaptive_config.utils.process import process_adapter_data

logger = logging.getLogger(__name__)

_DEFAULT_WARNING_LOGGER = logging.getLogger("adaptive_config")


def get_resolved_config(
    adapter: SupportsRead,
    key_matching: Optional[KeyMatching] = None,
    silent: Optional[bool] = None,
    transform: Optional[Transform] = None,
) -> ResolvedAdapterConfig:
    """Resolve per-adapter settings, falling back to the global ones when the adapter leaves them unset."""
    adapter_key_matching = getattr(adapter, "key_matching", None)
    adapter_silent = getattr(adapter, "silent", None)
    adapter_transform = getattr(adapter, "transform", None)
    return ResolvedAdapterConfig(
        key_matching=adapter_key_matching if adapter_key_matching is not None else (key_matching or "strict"),
        silent=adapter_silent if adapter_silent is not None else bool(silent),
        transform=adapter_transform if adapter_transform is not None else transform,
        nesting_separator=getattr(adapter, "nesting_separator", None),
    )


async def load_config(config: Config) -> BaseModel | ConfigRecord:
    """
    Read every adapter concurrently, merge the results in adapter order and validate them.

    - With no adapters, a snapshot of the process environment is validated.
    - A failing adapter is logged (unless silent) and contributes an empty record.
    - Validation errors go to `on_error` when given (and `{}` is returned), otherwise they are raised.
    """
    adapters = _normalize_adapters(config.adapters)
    warning_logger = config.logger or _DEFAULT_WARNING_LOGGER

    if not adapters:
        data: Mapping[str, Any] = get_safe_environ()
    else:
        logger.debug("Loading configuration. adapters=%s", len(adapters))
        resolved_configs = [
            get_resolved_config(adapter, config.key_matching, config.silent, config.transform)
            for adapter in adapters
        ]
        # Every read settles before any record is processed or merged.
        records = await asyncio.gather(
            *(
                _read_adapter(adapter, resolved, warning_logger)
                for adapter, resolved in zip(adapters, resolved_configs)
            )
        )
        data = deep_merge(
            {},
            *(_process(record, config, resolved) for record, resolved in zip(records, resolved_configs)),
        )

    return _validate(config, data)


def load_config_sync(config: Config) -> BaseModel | ConfigRecord:
    """
    Synchronous counterpart of load_config.

    Adapters are read one at a time in order. An adapter returning an awaitable raises
    SyncAdapterError.
    """
    adapters = _normalize_adapters(config.adapters)
    warning_logger = config.logger or _DEFAULT_WARNING_LOGGER

    if not adapters:
        data: Mapping[str, Any] = get_safe_environ()
    else:
        logger.debug("Loading configuration synchronously. adapters=%s", len(adapters))
        records = [_read_adapter_sync(adapter, config, warning_logger) for adapter in adapters]
        data = deep_merge({}, *records)

    return _validate(config, data)


def _normalize_adapters(adapters: Any) -> list[SupportsRead]:
    if adapters is None:
        return []
    if isinstance(adapters, (list, tuple)):
        return list(adapters)
    return [adapters]


async def _read_adapter(
    adapter: SupportsRead,
    resolved: ResolvedAdapterConfig,
    warning_logger: Logger,
) -> dict[str, Any]:
    try:
        data = adapter.read()
        if inspect.isawaitable(data):
            data = await data
        return _as_record(adapter, data)
    except Exception as exc:
        _warn_read_failure(adapter, exc, resolved, warning_logger)
        return {}


def _read_adapter_sync(adapter: SupportsRead, config: Config, warning_logger: Logger) -> Mapping[str, Any]:
    resolved = get_resolved_config(adapter, config.key_matching, config.silent, config.transform)
    try:
        data = adapter.read()
        if not inspect.isawaitable(data):
            data = _as_record(adapter, data)
    except Exception as exc:
        _warn_read_failure(adapter, exc, resolved, warning_logger)
        return {}

    if inspect.isawaitable(data):
        close = getattr(data, "close", None)
        if callable(close):
            close()
        raise SyncAdapterError(
            f"Data returned from {adapter.name} is awaitable. "
            "Use load_config instead of load_config_sync to use asynchronous adapters."
        )

    return _process(data, config, resolved)


def _as_record(adapter: SupportsRead, data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if type(data) is dict:
        return data
    if isinstance(data, Mapping):
        return dict(data)
    raise AdapterReadError(f"Expected a mapping from {adapter.name}, got: {type(data).__name__}")


def _warn_read_failure(
    adapter: SupportsRead,
    exc: Exception,
    resolved: ResolvedAdapterConfig,
    warning_logger: Logger,
) -> None:
    if resolved.silent:
        logger.debug("Suppressed adapter read failure. adapter=%s", adapter.name, exc_info=exc)
        return
    warning_logger.warning(f"Cannot read data from {adapter.name}: {exc}")


def _process(record: Mapping[str, Any], config: Config, resolved: ResolvedAdapterConfig) -> Mapping[str, Any]:
    return process_adapter_data(
        record,
        config.schema,
        resolved.key_matching,
        resolved.transform,
        resolved.nesting_separator,
    )


def _validate(config: Config, data: Mapping[str, Any]) -> BaseModel | ConfigRecord:
    try:
        result = config.schema.model_validate(data)
    except ValidationError as exc:
        if config.on_error is not None:
            config.on_error(exc)
            return {}
        raise

    if config.on_success is not None:
        config.on_success(result)
    return result
