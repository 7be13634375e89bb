"""Merge, filtering and key-reshaping helpers shared by the loader and adapters."""

from adaptive_config.utils.filtering import filter_by_regex, filtered_data, get_safe_environ
from adaptive_config.utils.key_matching import DEFAULT_MAX_DEPTH, KEY_MATCHERS, apply_key_matching
from adaptive_config.utils.merge import MISSING, deep_merge, is_mergeable
from adaptive_config.utils.process import process_adapter_data
from adaptive_config.utils.schema import get_nested_shape, get_shape
from adaptive_config.utils.transformation import apply_data_transformation, apply_nesting_separator

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "KEY_MATCHERS",
    "MISSING",
    "apply_data_transformation",
    "apply_key_matching",
    "apply_nesting_separator",
    "deep_merge",
    "filter_by_regex",
    "filtered_data",
    "get_nested_shape",
    "get_safe_environ",
    "get_shape",
    "is_mergeable",
    "process_adapter_data",
]
