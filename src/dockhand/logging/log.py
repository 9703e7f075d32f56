# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/logging/log.py

"""
Per-host run logs.

Every provisioning run gets its own trace file under
``<base_dir>/<machine_name>/``, named after the start time and run id, plus a
JSON-lines event file beside it. The run id is shared with the orchestrator so
log lines and events of one run can be matched up.
"""

from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

LOGGER_NAME = "dockhand"

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]")


@dataclass(frozen=True)
class RunLog:
    logger: logging.Logger
    host: str
    run_id: str
    path: Path

    @property
    def events_path(self) -> Path:
        return self.path.with_suffix(".jsonl")


def default_log_dir() -> Path:
    return Path.home() / ".dockhand" / "logs"


def run_log_path(
    host: str,
    run_id: str,
    *,
    base_dir: Optional[Path] = None,
    now: Optional[datetime] = None,
) -> Path:
    host_dir = (base_dir or default_log_dir()) / (_UNSAFE.sub("_", host).strip(".") or "unknown")
    ts = (now or datetime.now(timezone.utc)).strftime("%Y%m%d-%H%M%S")
    return host_dir / f"{ts}-{run_id}.log"


def init_logging(
    host: str,
    *,
    run_id: Optional[str] = None,
    base_dir: Optional[Path] = None,
    verbose: bool = False,
) -> RunLog:
    run_id = run_id or str(uuid.uuid4())
    log_path = run_log_path(host, run_id, base_dir=base_dir)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    formatter = logging.Formatter(
        f"%(asctime)s | %(levelname)-7s | {run_id[:8]} | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # file gets every command, console only progress unless --debug
    fh = logging.FileHandler(log_path)
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.INFO)
    ch.setFormatter(formatter)

    logger.addHandler(fh)
    logger.addHandler(ch)

    logger.info("provisioning run %s for %s", run_id, host)
    logger.debug("log_file=%s", log_path)

    return RunLog(logger=logger, host=host, run_id=run_id, path=log_path)
