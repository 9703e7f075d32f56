# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/commands.py

"""
Structured remote commands.

Commands are built as argument vectors and only turned into a shell string at
the edge, with every argument quoted. Multi-line payloads (repository files,
unit files) travel base64 encoded so embedded newlines reach the remote file
byte for byte.
"""

from __future__ import annotations

import base64
import shlex
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Command:
    argv: Tuple[str, ...]

    def render(self) -> str:
        return shlex.join(self.argv)

    def __str__(self) -> str:
        return self.render()


def cmd(*argv: str) -> Command:
    if not argv:
        raise ValueError("a command needs at least one argument")
    return Command(tuple(str(a) for a in argv))


def shell(script: str) -> Command:
    """Run *script* through ``sh -c`` on the remote host."""
    return cmd("sh", "-c", script)


def write_file(path: str, content: str) -> Command:
    """
    Overwrite *path* on the remote host with *content*.
    """
    payload = base64.b64encode(content.encode("utf-8")).decode("ascii")
    return shell(
        f"echo {payload} | base64 -d | tee {shlex.quote(path)} > /dev/null"
    )
