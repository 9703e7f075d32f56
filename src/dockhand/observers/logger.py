from __future__ import annotations
import logging
from .events import BaseEvent, StepFailed, StepStarted


class LoggerObserver:
    """Mirror lifecycle events into the run log."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        d = event.dict()
        etype = event.__class__.__name__
        msg = ", ".join(f"{k}={v}" for k, v in d.items() if k not in ("ts", "run_id", "host"))

        if isinstance(event, StepFailed):
            level = logging.ERROR
        elif isinstance(event, StepStarted):
            level = logging.DEBUG
        else:
            level = logging.INFO
        self.logger.log(level, "[EVENT] %s (%s): %s", etype, event.host, msg)
