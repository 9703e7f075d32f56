# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/engine_config.py

"""
Render the container engine's systemd unit.

systemd will not load options that are split over several lines; it silently
continues with a different set of options. Every value that lands in a
directive is therefore checked for line breaks before anything is rendered.
"""

from __future__ import annotations

from typing import Iterable

from dockhand.errors import TemplateRenderError

from .models import DockerOptions, EngineConfigContext
from .rendering import default_renderer

ENGINE_UNIT_PATH = "/etc/systemd/system/docker.service"


def _check_single_line(field: str, values: Iterable[str]) -> None:
    for value in values:
        if "\n" in str(value) or "\r" in str(value):
            raise TemplateRenderError(
                f"engine option {field} contains a line break: {value!r}"
            )


def render_engine_config(
    context: EngineConfigContext,
    path: str = ENGINE_UNIT_PATH,
) -> DockerOptions:
    engine = context.engine_options
    auth = context.auth_options

    _check_single_line("storage_driver", [engine.storage_driver])
    _check_single_line("labels", engine.labels)
    _check_single_line("insecure_registry", engine.insecure_registry)
    _check_single_line("registry_mirror", engine.registry_mirror)
    _check_single_line("arbitrary_flags", engine.arbitrary_flags)
    _check_single_line("env", engine.env)
    _check_single_line(
        "auth paths",
        [
            auth.ca_cert_remote_path,
            auth.server_cert_remote_path,
            auth.server_key_remote_path,
        ],
    )
    if not engine.storage_driver:
        raise TemplateRenderError("engine options have no storage driver")

    content = default_renderer().render(
        "docker.service.j2",
        {
            "docker_port": context.docker_port,
            "engine": engine,
            "auth": auth,
            "options_dir": context.docker_options_dir,
        },
    )
    return DockerOptions(content=content, path=path)
