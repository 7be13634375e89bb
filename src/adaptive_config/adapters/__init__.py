"""Built-in configuration sources."""

from adaptive_config.adapters.directory import AdapterSpecifier, directory_adapter
from adaptive_config.adapters.env import env_adapter
from adaptive_config.adapters.files import dotenv_adapter, json5_adapter, json_adapter, toml_adapter, yaml_adapter
from adaptive_config.adapters.script import script_adapter

__all__ = [
    "AdapterSpecifier",
    "directory_adapter",
    "dotenv_adapter",
    "env_adapter",
    "json5_adapter",
    "json_adapter",
    "script_adapter",
    "toml_adapter",
    "yaml_adapter",
]
