# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/registry.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Tuple

from dockhand.errors import UnknownOsReleaseError

from .base import Provisioner
from .interfaces import CommandChannel, Driver
from .models import OsReleaseInfo
from .os_release import os_release_command, parse_os_release

log = logging.getLogger("dockhand")

ProvisionerFactory = Callable[..., Provisioner]


@dataclass(frozen=True)
class RegisteredProvisioner:
    family: str
    factory: ProvisionerFactory
    os_ids: Tuple[str, ...]


_REGISTRY: Dict[str, RegisteredProvisioner] = {}


def register(family: str, factory: ProvisionerFactory, os_ids: Iterable[str]) -> None:
    if family in _REGISTRY:
        raise ValueError(f"provisioner family already registered: {family}")
    _REGISTRY[family] = RegisteredProvisioner(family, factory, tuple(os_ids))


def registered() -> Dict[str, RegisteredProvisioner]:
    return dict(_REGISTRY)


def lookup(info: OsReleaseInfo) -> RegisteredProvisioner:
    """
    Find the family that claims *info*, by ID first and then by ID_LIKE.
    """
    for candidate in (info.id, *info.id_like):
        for entry in _REGISTRY.values():
            if candidate in entry.os_ids:
                return entry
    raise UnknownOsReleaseError(info.id)


def detect_provisioner(driver: Driver, channel: CommandChannel, **kwargs) -> Provisioner:
    """
    Read the target's os-release and build the matching provisioner.
    """
    info = parse_os_release(channel.execute(os_release_command().render()))
    entry = lookup(info)
    log.info("[%s] detected %s %s -> %s provisioner", driver.machine_name, info.id, info.version, entry.family)
    return entry.factory(driver, channel, **kwargs)
