# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/os_release.py

from __future__ import annotations

import logging
import shlex
from typing import Dict, Mapping, Optional

from dockhand.errors import UnknownOsReleaseError

from .commands import Command, cmd, write_file
from .models import OsReleaseInfo, RepoCoordinate
from .rendering import default_renderer

log = logging.getLogger("dockhand")

OS_RELEASE_PATH = "/etc/os-release"
YUM_REPO_PATH = "/etc/yum.repos.d/docker.repo"

# rhel and centos both use the "centos" repo
DEFAULT_REPO_TABLE: Dict[str, RepoCoordinate] = {
    "rhel": RepoCoordinate(family="centos", version="7"),
    "centos": RepoCoordinate(family="centos", version="7"),
    "fedora": RepoCoordinate(family="fedora", version="22"),
}


def parse_os_release(text: str) -> OsReleaseInfo:
    """
    Parse the KEY=value lines of an os-release file.
    """
    values: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parsed = shlex.split(value)
        except ValueError:
            parsed = [value]
        values[key.strip()] = parsed[0] if parsed else ""

    return OsReleaseInfo(
        id=values.get("ID", "").lower(),
        version=values.get("VERSION_ID", ""),
        name=values.get("NAME", ""),
        id_like=tuple(values.get("ID_LIKE", "").split()),
    )


def os_release_command() -> Command:
    return cmd("cat", OS_RELEASE_PATH)


def resolve_repo_coordinate(
    info: OsReleaseInfo,
    table: Optional[Mapping[str, RepoCoordinate]] = None,
) -> RepoCoordinate:
    """
    Map an OS identity to the package repository it should use.

    Only ids present in *table* resolve; anything else is an error.
    """
    table = DEFAULT_REPO_TABLE if table is None else table
    try:
        coord = table[info.id]
    except KeyError:
        raise UnknownOsReleaseError(info.id) from None
    log.debug("os %s %s -> repo %s/%s", info.id, info.version, coord.family, coord.version)
    return coord


def render_repo_file(coordinate: RepoCoordinate) -> str:
    return default_renderer().render(
        "docker.repo.j2",
        {"family": coordinate.family, "version": coordinate.version},
    )


def repo_file_command(text: str, path: str = YUM_REPO_PATH) -> Command:
    return write_file(path, text)
