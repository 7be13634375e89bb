from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from adaptive_config.errors import AdapterMappingError
from adaptive_config.interfaces import SupportsRead

AdapterFactory = Callable[[str], SupportsRead]


@dataclass(frozen=True, slots=True)
class AdapterSpecifier:
    """Builds a per-file adapter for every file whose name ends with one of `extensions`."""

    extensions: Sequence[str]
    adapter_factory: AdapterFactory


def get_extension_to_adapter_factory_map(specifiers: Sequence[AdapterSpecifier]) -> dict[str, AdapterFactory]:
    mapping: dict[str, AdapterFactory] = {}
    for specifier in specifiers:
        for extension in specifier.extensions:
            if extension in mapping:
                raise AdapterMappingError(
                    f"Ambiguous adapter mapping for file extension {extension} - please ensure file "
                    "extensions are specified at most once across all adapter specifiers."
                )
            mapping[extension] = specifier.adapter_factory
    return mapping
