from __future__ import annotations

from adaptive_config.adapters.directory.variables import ConfigResolutionVariables


def get_allowed_filenames(variables: ConfigResolutionVariables) -> list[str]:
    """
    Return the recognised file basenames, lowest precedence first.

    The order is default, deployment, short hostname, hostname, local. With an
    instance name, each entry is followed by its `-{instance}` variant.
    """
    deployment = variables.deployment_name
    instance = variables.instance_name
    host = variables.hostname
    short_host = variables.short_hostname

    if instance is None:
        return [
            "default",
            deployment,
            short_host,
            f"{short_host}-{deployment}",
            host,
            f"{host}-{deployment}",
            "local",
            f"local-{deployment}",
        ]

    return [
        "default",
        f"default-{instance}",
        deployment,
        f"{deployment}-{instance}",
        short_host,
        f"{short_host}-{deployment}",
        f"{short_host}-{instance}",
        f"{short_host}-{deployment}-{instance}",
        host,
        f"{host}-{deployment}",
        f"{host}-{instance}",
        f"{host}-{deployment}-{instance}",
        "local",
        f"local-{deployment}",
        f"local-{instance}",
        f"local-{deployment}-{instance}",
    ]
