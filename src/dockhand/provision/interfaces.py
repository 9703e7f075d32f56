# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/interfaces.py

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .models import AuthOptions, SwarmOptions

if TYPE_CHECKING:
    from .base import Provisioner


class CommandChannel(Protocol):
    """
    Executes one command string on the target host.

    Implementations raise CommandExecutionError on a non-zero exit status or a
    transport failure. ``pty=True`` asks for a pseudo-terminal, which some
    distributions require for sudo.
    """

    def execute(self, command: str, *, pty: bool = False) -> str:
        ...


class Driver(Protocol):
    """
    The slice of the machine backend the provisioner needs.
    """

    @property
    def machine_name(self) -> str: ...

    @property
    def driver_name(self) -> str: ...

    def sudo(self, command: str) -> str:
        """Wrap *command* with the privilege escalation prefix for the host."""
        ...


class AuthBackend(Protocol):
    def configure(self, provisioner: "Provisioner", auth_options: AuthOptions) -> None:
        """Place TLS material on the host at the remote paths in *auth_options*."""
        ...


class SwarmBackend(Protocol):
    def configure(self, swarm_options: SwarmOptions, auth_options: AuthOptions) -> None:
        ...
