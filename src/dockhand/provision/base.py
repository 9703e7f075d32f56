# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/base.py

from __future__ import annotations

import logging
import posixpath
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from dockhand.errors import ProvisionError

from .actions import PackageAction, ServiceAction
from .commands import Command, cmd, write_file
from .engine_config import ENGINE_UNIT_PATH, render_engine_config
from .hostname import HOSTNAME_FILE, HOSTS_FILE, hostname_commands
from .interfaces import CommandChannel, Driver
from .models import (
    AuthOptions,
    DockerOptions,
    EngineConfigContext,
    EngineOptions,
    OsReleaseInfo,
    RepoCoordinate,
)
from .os_release import os_release_command, parse_os_release

log = logging.getLogger("dockhand")

DEFAULT_DOCKER_PORT = 2376


class Provisioner(ABC):
    """
    Per-host provisioner for one OS family.

    An instance is bound to exactly one driver and one command channel and
    must not be shared between concurrent runs.
    """

    family: str = ""
    engine_service = "docker"
    engine_package = "docker-engine"
    default_storage_driver = "overlay2"
    requires_pty = False

    def __init__(
        self,
        driver: Driver,
        channel: CommandChannel,
        *,
        packages: Optional[Sequence[str]] = None,
        docker_options_dir: str = "/etc/docker",
        daemon_options_file: str = ENGINE_UNIT_PATH,
        repo_table: Optional[Mapping[str, RepoCoordinate]] = None,
        hostname_file: str = HOSTNAME_FILE,
        hosts_file: str = HOSTS_FILE,
    ):
        self.driver = driver
        self.channel = channel
        self.packages = tuple(packages) if packages is not None else self.default_packages()
        self.docker_options_dir = docker_options_dir
        self.daemon_options_file = daemon_options_file
        self.repo_table = repo_table
        self.hostname_file = hostname_file
        self.hosts_file = hosts_file

    # ------------------ command plumbing ------------------

    def run(self, command: Command, *, sudo: bool = True) -> str:
        line = command.render()
        if sudo:
            line = self.driver.sudo(line)
        log.debug("[%s] $ %s", self.driver.machine_name, line)
        return self.channel.execute(line, pty=self.requires_pty)

    # ------------------ shared capabilities ------------------

    def default_packages(self) -> tuple:
        return ()

    def get_os_release(self) -> OsReleaseInfo:
        return parse_os_release(self.run(os_release_command(), sudo=False))

    def set_hostname(self, name: str) -> None:
        for command in hostname_commands(
            name, hostname_file=self.hostname_file, hosts_file=self.hosts_file
        ):
            self.run(command)

    def make_docker_options_dir(self) -> None:
        self.run(cmd("mkdir", "-p", self.docker_options_dir))

    def remote_auth_options(self, auth: AuthOptions) -> AuthOptions:
        """
        Point the auth options at the certificate locations on this host.
        """
        return auth.model_copy(
            update={
                "ca_cert_remote_path": posixpath.join(self.docker_options_dir, "ca.pem"),
                "server_cert_remote_path": posixpath.join(self.docker_options_dir, "server.pem"),
                "server_key_remote_path": posixpath.join(self.docker_options_dir, "server-key.pem"),
            }
        )

    def generate_docker_options(
        self,
        engine: EngineOptions,
        auth: AuthOptions,
        docker_port: int = DEFAULT_DOCKER_PORT,
    ) -> DockerOptions:
        labels = list(engine.labels) + [f"provider={self.driver.driver_name}"]
        context = EngineConfigContext(
            docker_port=docker_port,
            auth_options=auth,
            engine_options=engine.model_copy(update={"labels": labels}),
            docker_options_dir=self.docker_options_dir,
        )
        return render_engine_config(context, path=self.daemon_options_file)

    def write_docker_options(self, options: DockerOptions) -> None:
        self.run(write_file(options.path, options.content))

    def daemon_responding(self) -> bool:
        """
        Probe the engine once. Transport and command failures mean "not yet".
        """
        try:
            self.run(cmd("docker", "version"))
        except ProvisionError as e:
            log.warning("[%s] engine not responding yet: %s", self.driver.machine_name, e)
            return False
        return True

    # ------------------ family specific ------------------

    @abstractmethod
    def package(self, name: str, action: PackageAction) -> None: ...

    @abstractmethod
    def service(self, name: str, action: ServiceAction) -> None: ...

    @abstractmethod
    def update_os(self) -> None: ...

    @abstractmethod
    def configure_repository(self) -> None: ...

    @abstractmethod
    def install_engine(self) -> None: ...
