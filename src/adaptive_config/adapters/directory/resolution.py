from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence


@dataclass(frozen=True, slots=True)
class ConfigResolutionResult:
    dir: str
    name: str
    ext: str

    @property
    def path(self) -> str:
        return os.path.join(self.dir, f"{self.name}{self.ext}")


def match_extension(filename: str, extensions: Iterable[str]) -> Optional[str]:
    """Return the longest of `extensions` that `filename` ends with, leaving a non-empty name."""
    matches = [ext for ext in extensions if ext and filename.endswith(ext) and len(filename) > len(ext)]
    if not matches:
        return None
    return max(matches, key=len)


def resolve_config_files_in_directory(
    directory: str,
    allowed_filenames: Sequence[str],
    extensions: Iterable[str],
) -> list[ConfigResolutionResult]:
    known_extensions = list(extensions)
    allowed = set(allowed_filenames)
    results: list[ConfigResolutionResult] = []
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        if not entry.is_file():
            continue
        ext = match_extension(entry.name, known_extensions)
        if ext is None:
            continue
        name = entry.name[: -len(ext)]
        if name not in allowed:
            continue
        results.append(ConfigResolutionResult(dir=directory, name=name, ext=ext))
    return results


def resolve_config_files(
    paths: Sequence[str],
    allowed_filenames: Sequence[str],
    extensions: Iterable[str],
) -> list[ConfigResolutionResult]:
    known_extensions = list(extensions)
    results: list[ConfigResolutionResult] = []
    for directory in paths:
        results.extend(resolve_config_files_in_directory(directory, allowed_filenames, known_extensions))
    return results


def sort_config_resolution_results(
    results: Iterable[ConfigResolutionResult],
    allowed_filenames: Sequence[str],
    paths: Sequence[str],
) -> list[ConfigResolutionResult]:
    """Order by basename precedence, then by the directory's position in `paths`."""
    name_index = {}
    for index, name in enumerate(allowed_filenames):
        name_index.setdefault(name, index)
    dir_index = {}
    for index, directory in enumerate(paths):
        dir_index.setdefault(directory, index)
    return sorted(results, key=lambda result: (name_index[result.name], dir_index[result.dir]))
