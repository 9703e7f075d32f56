# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/hostname.py

from __future__ import annotations

import re
import shlex
from typing import List

from dockhand.errors import ProvisionError

from .commands import Command, shell

HOSTNAME_FILE = "/etc/hostname"
HOSTS_FILE = "/etc/hosts"

# debian-style loopback address for the machine's own name
LOOPBACK_ADDRESS = "127.0.1.1"

_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def validate_hostname(name: str) -> str:
    if not name or len(name) > 253:
        raise ProvisionError(f"invalid hostname: {name!r}")
    for label in name.split("."):
        if not _LABEL.match(label):
            raise ProvisionError(f"invalid hostname: {name!r}")
    return name


def set_hostname_command(name: str, hostname_file: str = HOSTNAME_FILE) -> Command:
    name = validate_hostname(name)
    q = shlex.quote(name)
    return shell(f"hostname {q} && echo {q} | tee {shlex.quote(hostname_file)}")


def loopback_entry_command(name: str, hosts_file: str = HOSTS_FILE) -> Command:
    """
    Leave exactly one loopback hostname line in the hosts file.

    The first existing line is rewritten in place and any later duplicates
    are dropped. Without one, the entry is appended on a line of its own,
    even when the file lacks a trailing newline. The check runs on the
    remote host, so one round trip covers every case.
    """
    name = validate_hostname(name)
    entry = f"{LOOPBACK_ADDRESS} {name}"
    pattern = "^" + LOOPBACK_ADDRESS.replace(".", r"\.") + "[[:space:]]"
    # hold space counts matches: the first is rewritten, the rest deleted
    rewrite = f"/{pattern}/{{x;s/^/./;/^\\.$/!{{x;d;}};x;s/.*/{entry}/;}}"
    hosts = shlex.quote(hosts_file)
    script = (
        f"if grep -q {shlex.quote(pattern)} {hosts}; "
        f"then sed -i {shlex.quote(rewrite)} {hosts}; "
        f"else [ -z \"$(tail -c1 {hosts})\" ] || echo >> {hosts}; "
        f"echo {shlex.quote(entry)} >> {hosts}; fi"
    )
    return shell(script)


def hostname_commands(
    name: str,
    *,
    hostname_file: str = HOSTNAME_FILE,
    hosts_file: str = HOSTS_FILE,
) -> List[Command]:
    return [
        set_hostname_command(name, hostname_file),
        loopback_entry_command(name, hosts_file),
    ]
