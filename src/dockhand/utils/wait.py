# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/utils/wait.py

from __future__ import annotations

import logging
import time
from typing import Callable

from dockhand.errors import ReadinessTimeoutError

log = logging.getLogger("dockhand")

DEFAULT_TIMEOUT = 180.0
DEFAULT_INTERVAL = 3.0


def wait_until(
    probe: Callable[[], bool],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    interval: float = DEFAULT_INTERVAL,
    what: str = "condition",
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """
    Call *probe* until it returns True or *timeout* seconds have elapsed.

    The probe is always called at least once. Returns the number of attempts
    it took. Raises ReadinessTimeoutError when the window closes.
    """
    deadline = clock() + timeout
    attempt = 0
    while True:
        attempt += 1
        if probe():
            log.debug("%s ready after %d attempt(s)", what, attempt)
            return attempt
        if clock() >= deadline:
            raise ReadinessTimeoutError(
                f"{what} not ready after {attempt} attempt(s) in {timeout:g}s"
            )
        log.debug("%s not ready (attempt %d), retrying in %gs", what, attempt, interval)
        sleep(interval)
