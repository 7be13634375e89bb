"""Load configuration from multiple sources, deep-merge it and validate it with pydantic."""

from adaptive_config.adapters import (
    AdapterSpecifier,
    directory_adapter,
    dotenv_adapter,
    env_adapter,
    json5_adapter,
    json_adapter,
    script_adapter,
    toml_adapter,
    yaml_adapter,
)
from adaptive_config.errors import (
    AdapterMappingError,
    AdapterReadError,
    ConfigError,
    DirectoryReadError,
    NestedKeyConflictError,
    SyncAdapterError,
    TransformError,
)
from adaptive_config.loader import get_resolved_config, load_config, load_config_sync
from adaptive_config.models import Adapter, Config, ConfigEntry, ResolvedAdapterConfig
from adaptive_config.utils import MISSING, deep_merge, is_mergeable

__all__ = [
    "MISSING",
    "Adapter",
    "AdapterMappingError",
    "AdapterReadError",
    "AdapterSpecifier",
    "Config",
    "ConfigEntry",
    "ConfigError",
    "DirectoryReadError",
    "NestedKeyConflictError",
    "ResolvedAdapterConfig",
    "SyncAdapterError",
    "TransformError",
    "deep_merge",
    "directory_adapter",
    "dotenv_adapter",
    "env_adapter",
    "get_resolved_config",
    "is_mergeable",
    "json5_adapter",
    "json_adapter",
    "load_config",
    "load_config_sync",
    "script_adapter",
    "toml_adapter",
    "yaml_adapter",
]
