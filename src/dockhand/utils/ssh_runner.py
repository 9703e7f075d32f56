# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/utils/ssh_runner.py

from __future__ import annotations

import logging
import socket
from typing import Optional

import paramiko

from dockhand.config.models import HostSpec
from dockhand.errors import CommandExecutionError

log = logging.getLogger("dockhand")


class SSHRunner:
    """
    Command channel over one paramiko connection.

    One runner belongs to one host for the length of a provisioning run.
    """

    def __init__(self, client: paramiko.SSHClient, *, timeout: Optional[float] = None):
        self.client = client
        self.timeout = timeout

    def run(
        self,
        cmd: str,
        *,
        pty: bool = False,
        timeout: Optional[float] = None,
    ) -> tuple[int, str, str]:
        stdin, stdout, stderr = self.client.exec_command(
            cmd, timeout=timeout or self.timeout, get_pty=pty
        )
        out = stdout.read().decode("utf-8", errors="replace")
        err = stderr.read().decode("utf-8", errors="replace")
        rc = stdout.channel.recv_exit_status()
        return rc, out, err

    def execute(self, command: str, *, pty: bool = False) -> str:
        try:
            rc, out, err = self.run(command, pty=pty)
        except (paramiko.SSHException, socket.timeout, OSError) as e:
            raise CommandExecutionError(command, stderr=str(e)) from e
        if rc != 0:
            # with a pty, stderr is folded into stdout
            raise CommandExecutionError(command, exit_code=rc, stderr=err or out)
        return out

    def close(self) -> None:
        self.client.close()


class SSHDriver:
    """
    Machine backend facade for a host that already exists.
    """

    def __init__(self, host: HostSpec, driver_name: str = "generic"):
        self.host = host
        self._driver_name = driver_name

    @property
    def machine_name(self) -> str:
        return self.host.machine_name

    @property
    def driver_name(self) -> str:
        return self._driver_name

    def sudo(self, command: str) -> str:
        if self.host.username == "root":
            return command
        return f"sudo {command}"


def _load_pkey(path: str):
    for key_cls in (
        paramiko.Ed25519Key,
        paramiko.RSAKey,
        paramiko.ECDSAKey,
    ):
        try:
            return key_cls.from_private_key_file(path)
        except paramiko.SSHException:
            continue
    return None


def open_ssh(
    host: HostSpec,
    *,
    connect_timeout: float = 20.0,
    command_timeout: Optional[float] = None,
) -> SSHRunner:
    """
    Connect to the host; any connect or auth failure raises CommandExecutionError.
    """
    target = f"ssh {host.username}@{host.address}:{host.port}"
    client = paramiko.SSHClient()
    client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

    try:
        pkey = _load_pkey(str(host.pkey_path.expanduser())) if host.pkey_path else None
        client.connect(
            hostname=host.address,
            port=host.port,
            username=host.username,
            password=host.password if not pkey else None,
            pkey=pkey,
            timeout=connect_timeout,
            allow_agent=pkey is None,
            look_for_keys=pkey is None,
        )
    except (paramiko.SSHException, socket.timeout, OSError) as e:
        client.close()
        raise CommandExecutionError(target, stderr=str(e)) from e
    log.info("SSH connected to %s@%s:%d", host.username, host.address, host.port)

    return SSHRunner(client, timeout=command_timeout)
