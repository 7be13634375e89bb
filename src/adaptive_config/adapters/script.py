from __future__ import annotations

import hashlib
import inspect
import os
import sys
from importlib.machinery import SourceFileLoader
from importlib.util import module_from_spec, spec_from_loader
from types import ModuleType
from typing import Any, Awaitable, Optional, Union

from adaptive_config.errors import AdapterReadError
from adaptive_config.models import Adapter, KeyMatching, Transform
from adaptive_config.utils.filtering import Regex, filtered_data

ADAPTER_NAME = "script adapter"


def _import_script(path: str) -> ModuleType:
    # Each read executes the file again. The module is only registered in
    # sys.modules while its body runs.
    digest = hashlib.sha256(os.path.abspath(path).encode("utf-8")).hexdigest()[:16]
    loader = SourceFileLoader(f"_adaptive_config_script_{digest}", path)
    spec = spec_from_loader(loader.name, loader)
    if spec is None:
        raise ImportError(f"No module spec for {path}")
    module = module_from_spec(spec)
    previous = sys.modules.get(loader.name)
    sys.modules[loader.name] = module
    try:
        loader.exec_module(module)
    finally:
        if previous is None:
            sys.modules.pop(loader.name, None)
        else:
            sys.modules[loader.name] = previous
    return module


def script_adapter(
    *,
    path: Union[str, os.PathLike],
    attribute: str = "config",
    regex: Optional[Regex] = None,
    silent: Optional[bool] = None,
    key_matching: Optional[KeyMatching] = None,
    transform: Optional[Transform] = None,
    nesting_separator: Optional[str] = None,
) -> Adapter:
    """
    Execute a Python file and read the record it exports as `attribute`.

    The export may be a dict or a zero-argument callable returning one. An async
    callable makes the adapter asynchronous.
    """
    script_path = os.fspath(path)

    def _wrap(exc: Exception) -> AdapterReadError:
        return AdapterReadError(f"Failed to import() script at {script_path}: {exc}")

    async def _await_export(pending: Awaitable[Any]) -> Any:
        try:
            return filtered_data(await pending, regex=regex)
        except Exception as exc:
            raise _wrap(exc) from exc

    def read() -> Any:
        try:
            module = _import_script(script_path)
            if not hasattr(module, attribute):
                raise AttributeError(f"module has no attribute '{attribute}'")
            data = getattr(module, attribute)
            if callable(data):
                data = data()
            if inspect.isawaitable(data):
                return _await_export(data)
            return filtered_data(data, regex=regex)
        except Exception as exc:
            raise _wrap(exc) from exc

    return Adapter(
        name=ADAPTER_NAME,
        read=read,
        silent=silent,
        key_matching=key_matching,
        transform=transform,
        nesting_separator=nesting_separator,
    )
