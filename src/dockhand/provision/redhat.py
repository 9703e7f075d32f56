# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/redhat.py

from __future__ import annotations

import logging

from .actions import RELOAD_BEFORE, PackageAction, ServiceAction, command_for
from .base import Provisioner
from .commands import cmd
from .os_release import render_repo_file, repo_file_command, resolve_repo_coordinate
from .registry import register

log = logging.getLogger("dockhand")


class RedHatProvisioner(Provisioner):
    """
    RHEL, CentOS and Fedora hosts: yum for packages, systemd for services.
    """

    family = "redhat"
    default_storage_driver = "devicemapper"
    # sudo on these hosts refuses to run without a tty
    requires_pty = True

    def default_packages(self) -> tuple:
        return ("curl",)

    def package(self, name: str, action: PackageAction) -> None:
        self.run(cmd("yum", command_for(action), "-y", name))

    def service(self, name: str, action: ServiceAction) -> None:
        if action in RELOAD_BEFORE:
            self.run(cmd("systemctl", "daemon-reload"))
        self.run(cmd("systemctl", command_for(action), name))

    def update_os(self) -> None:
        # libdevicemapper and the engine package need a current base system
        self.run(cmd("yum", "-y", "update"))

    def configure_repository(self) -> None:
        coordinate = resolve_repo_coordinate(self.get_os_release(), self.repo_table)
        self.install_repo_file(render_repo_file(coordinate))

    def install_repo_file(self, text: str) -> None:
        self.run(repo_file_command(text))

    def install_engine(self) -> None:
        log.debug("[%s] installing %s", self.driver.machine_name, self.engine_package)
        self.run(cmd("yum", "install", "-y", self.engine_package))
        self.service(self.engine_service, ServiceAction.RESTART)
        self.service(self.engine_service, ServiceAction.ENABLE)


register("redhat", RedHatProvisioner, os_ids=("rhel", "centos", "fedora"))
