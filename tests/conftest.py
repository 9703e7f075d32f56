from __future__ import annotations

import logging

import pytest

from dockhand.errors import CommandExecutionError
from dockhand.logging.log import LOGGER_NAME


CENTOS_OS_RELEASE = 'NAME="CentOS Linux"\nVERSION="7 (Core)"\nID="centos"\nID_LIKE="rhel fedora"\nVERSION_ID="7"\n'


class FakeChannel:
    """
    Records every command and answers from canned responses.

    responses: substring -> stdout
    fail_on:   substring -> always fails
    failures:  substring -> number of times to fail before succeeding
    """

    def __init__(self, responses=None, fail_on=None, failures=None):
        self.calls = []
        self.responses = {"cat /etc/os-release": CENTOS_OS_RELEASE}
        self.responses.update(responses or {})
        self.fail_on = fail_on
        self.failures = dict(failures or {})

    @property
    def commands(self):
        return [c for c, _ in self.calls]

    def execute(self, command, *, pty=False):
        self.calls.append((command, pty))
        if self.fail_on and self.fail_on in command:
            raise CommandExecutionError(command, exit_code=1, stderr="boom")
        for key, remaining in self.failures.items():
            if key in command and remaining > 0:
                self.failures[key] = remaining - 1
                raise CommandExecutionError(command, exit_code=1, stderr="not yet")
        for key, out in self.responses.items():
            if key in command:
                return out
        return ""


class FakeDriver:
    def __init__(self, machine_name="node-1", driver_name="fake"):
        self._machine_name = machine_name
        self._driver_name = driver_name

    @property
    def machine_name(self):
        return self._machine_name

    @property
    def driver_name(self):
        return self._driver_name

    def sudo(self, command):
        return f"sudo {command}"


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def make_channel():
    return FakeChannel


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo handlers and propagation that init_logging puts on the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
