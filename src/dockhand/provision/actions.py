# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/actions.py

from __future__ import annotations

from enum import Enum
from typing import Dict, Union


class PackageAction(Enum):
    INSTALL = "install"
    REMOVE = "remove"
    UPGRADE = "upgrade"


class ServiceAction(Enum):
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    ENABLE = "enable"
    DISABLE = "disable"


Action = Union[PackageAction, ServiceAction]

_VERBS: Dict[Action, str] = {
    PackageAction.INSTALL: "install",
    PackageAction.REMOVE: "remove",
    PackageAction.UPGRADE: "upgrade",
    ServiceAction.START: "start",
    ServiceAction.STOP: "stop",
    ServiceAction.RESTART: "restart",
    ServiceAction.ENABLE: "enable",
    ServiceAction.DISABLE: "disable",
}

# systemd only picks up unit file changes after a daemon-reload
RELOAD_BEFORE = frozenset({ServiceAction.START, ServiceAction.RESTART})


def _check_total() -> None:
    for enum_cls in (PackageAction, ServiceAction):
        for member in enum_cls:
            if not _VERBS.get(member):
                raise RuntimeError(f"no command verb mapped for {member!r}")


_check_total()


def command_for(action: Action) -> str:
    """Return the command verb for a package or service action."""
    try:
        return _VERBS[action]
    except KeyError:
        raise ValueError(f"not a package or service action: {action!r}") from None
