from __future__ import annotations

import os
import socket
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_DEPLOYMENT_NAME = "development"


@dataclass(frozen=True, slots=True)
class ConfigResolutionVariables:
    deployment_name: str
    instance_name: Optional[str]
    hostname: str
    short_hostname: str


def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return dict(os.environ) if environ is None else environ


def resolve_deployment_name(environ: Optional[Mapping[str, str]] = None) -> str:
    """CONFIG_ENV, then APP_ENV, then "development"."""
    env = _environ(environ)
    if "CONFIG_ENV" in env:
        return env["CONFIG_ENV"]
    if "APP_ENV" in env:
        return env["APP_ENV"]
    return DEFAULT_DEPLOYMENT_NAME


def resolve_instance_name(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    return _environ(environ).get("APP_INSTANCE")


def resolve_hostname(environ: Optional[Mapping[str, str]] = None) -> str:
    """HOST, then HOSTNAME, then the name reported by the operating system."""
    env = _environ(environ)
    if "HOST" in env:
        return env["HOST"]
    if "HOSTNAME" in env:
        return env["HOSTNAME"]
    return socket.gethostname()


def resolve_short_hostname(environ: Optional[Mapping[str, str]] = None) -> str:
    return resolve_hostname(environ).split(".", 1)[0]


def resolve_config_resolution_variables(
    environ: Optional[Mapping[str, str]] = None,
) -> ConfigResolutionVariables:
    env = _environ(environ)
    return ConfigResolutionVariables(
        deployment_name=resolve_deployment_name(env),
        instance_name=resolve_instance_name(env),
        hostname=resolve_hostname(env),
        short_hostname=resolve_short_hostname(env),
    )
