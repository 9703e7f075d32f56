# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/errors.py

"""
Error taxonomy for provisioning runs.

Callers can tell "the daemon never came up" (ReadinessTimeoutError) apart from
"a setup command failed" (CommandExecutionError). Every error raised out of the
orchestrator carries the step it happened in.
"""

from __future__ import annotations

from typing import Optional


class ProvisionError(RuntimeError):
    """Base class for provisioning failures."""

    def __init__(self, message: str, *, step=None):
        super().__init__(message)
        self.step = step

    def __str__(self) -> str:
        msg = super().__str__()
        if self.step is not None:
            return f"[{self.step}] {msg}"
        return msg


class UnknownOsReleaseError(ProvisionError):
    """Raised when no package repository is known for the target OS."""

    def __init__(self, os_id: str, *, step=None):
        super().__init__(f"unknown OS for package repository: {os_id!r}", step=step)
        self.os_id = os_id


class CommandExecutionError(ProvisionError):
    """Raised when a remote command exits non-zero or the transport fails."""

    def __init__(
        self,
        command: str,
        *,
        exit_code: Optional[int] = None,
        stderr: str = "",
        step=None,
    ):
        if exit_code is None:
            detail = f"transport failure running {command!r}"
        else:
            detail = f"command {command!r} exited with {exit_code}"
        if stderr.strip():
            detail += f": {stderr.strip()}"
        super().__init__(detail, step=step)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr


class TemplateRenderError(ProvisionError):
    """Raised when a template or its context is malformed."""


class ReadinessTimeoutError(ProvisionError):
    """Raised when a readiness probe never succeeds within its window."""


class ConfigError(ProvisionError):
    """Raised when a provisioning config file cannot be loaded or validated."""
