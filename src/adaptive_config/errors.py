from __future__ import annotations


class ConfigError(RuntimeError):
    pass


class AdapterReadError(ConfigError):
    """An adapter failed to read or parse its source."""


class DirectoryReadError(AdapterReadError):
    pass


class TransformError(ConfigError, ValueError):
    """A transform function returned something other than False or a key/value pair."""


class NestedKeyConflictError(ConfigError, ValueError):
    pass


class SyncAdapterError(ConfigError):
    """An adapter returned an awaitable from inside load_config_sync."""


class AdapterMappingError(ConfigError, ValueError):
    pass
