# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/backends.py

"""
Default auth and swarm collaborators used by the CLI.

Certificates are expected to exist already; generating them is someone
else's job.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dockhand.errors import ProvisionError

from .base import Provisioner
from .commands import write_file
from .models import AuthOptions, SwarmOptions

log = logging.getLogger("dockhand")


class CertificateUploader:
    """Copy existing local CA / server certificates to their remote paths."""

    def configure(self, provisioner: Provisioner, auth_options: AuthOptions) -> None:
        pairs = [
            (auth_options.ca_cert_path, auth_options.ca_cert_remote_path),
            (auth_options.server_cert_path, auth_options.server_cert_remote_path),
            (auth_options.server_key_path, auth_options.server_key_remote_path),
        ]
        for local, remote in pairs:
            if not local or not remote:
                raise ProvisionError("auth options are missing a certificate path")
            path = Path(local).expanduser()
            try:
                content = path.read_text(encoding="utf-8")
            except OSError as e:
                raise ProvisionError(f"cannot read certificate {path}: {e}") from e
            log.debug("[%s] uploading %s -> %s", provisioner.driver.machine_name, path, remote)
            provisioner.run(write_file(remote, content))


class NoAuth:
    """Leave certificate placement to whoever built the host image."""

    def configure(self, provisioner: Provisioner, auth_options: AuthOptions) -> None:
        log.info("[%s] skipping certificate upload", provisioner.driver.machine_name)


class SkipSwarm:
    def configure(self, swarm_options: SwarmOptions, auth_options: AuthOptions) -> None:
        if swarm_options.is_swarm:
            raise ProvisionError("swarm requested but no swarm backend is configured")
        log.debug("swarm disabled, nothing to configure")
