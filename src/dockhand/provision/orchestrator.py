# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/orchestrator.py

"""
Bootstrap sequence for one host.

Init -> HostnameSet -> BasePackagesInstalled -> OsUpdated -> RepoConfigured
-> EngineInstalled -> EngineRunning -> OptionsDirReady -> AuthConfigured
-> SwarmConfigured -> Done

Each step takes the current ProvisionState and returns the next one. The first
failure aborts the run; the error carries the step it happened in. Nothing is
rolled back, a retry starts again from the top and relies on every step being
safe to repeat.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from dockhand.errors import ProvisionError
from dockhand.observers.dispatcher import EventBus
from dockhand.observers.events import (
    ProvisionCompleted,
    ProvisionStarted,
    StepFailed,
    StepStarted,
    StepSucceeded,
    new_ctx,
)
from dockhand.utils.wait import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, wait_until

from .actions import PackageAction, ServiceAction
from .base import DEFAULT_DOCKER_PORT, Provisioner
from .interfaces import AuthBackend, SwarmBackend
from .models import AuthOptions, EngineOptions, ProvisionState, SwarmOptions

log = logging.getLogger("dockhand")


class Step(str, Enum):
    HOSTNAME_SET = "hostname-set"
    BASE_PACKAGES_INSTALLED = "base-packages-installed"
    OS_UPDATED = "os-updated"
    REPO_CONFIGURED = "repo-configured"
    ENGINE_INSTALLED = "engine-installed"
    ENGINE_RUNNING = "engine-running"
    OPTIONS_DIR_READY = "options-dir-ready"
    AUTH_CONFIGURED = "auth-configured"
    SWARM_CONFIGURED = "swarm-configured"

    def __str__(self) -> str:
        return self.value


STEP_ORDER: Tuple[Step, ...] = tuple(Step)

StepFn = Callable[[ProvisionState], ProvisionState]


class Orchestrator:
    def __init__(
        self,
        provisioner: Provisioner,
        auth_backend: AuthBackend,
        swarm_backend: SwarmBackend,
        *,
        bus: Optional[EventBus] = None,
        docker_port: int = DEFAULT_DOCKER_PORT,
        readiness_timeout: float = DEFAULT_TIMEOUT,
        readiness_interval: float = DEFAULT_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        run_id: Optional[str] = None,
    ):
        self.provisioner = provisioner
        self.auth_backend = auth_backend
        self.swarm_backend = swarm_backend
        self.bus = bus or EventBus()
        self.docker_port = docker_port
        self.readiness_timeout = readiness_timeout
        self.readiness_interval = readiness_interval
        self.sleep = sleep
        self.run_id = run_id

    # ------------------ steps ------------------

    def _steps(self) -> List[Tuple[Step, StepFn]]:
        return [
            (Step.HOSTNAME_SET, self.set_hostname),
            (Step.BASE_PACKAGES_INSTALLED, self.install_base_packages),
            (Step.OS_UPDATED, self.update_os),
            (Step.REPO_CONFIGURED, self.configure_repository),
            (Step.ENGINE_INSTALLED, self.install_engine),
            (Step.ENGINE_RUNNING, self.wait_for_engine),
            (Step.OPTIONS_DIR_READY, self.make_options_dir),
            (Step.AUTH_CONFIGURED, self.configure_auth),
            (Step.SWARM_CONFIGURED, self.configure_swarm),
        ]

    def set_hostname(self, state: ProvisionState) -> ProvisionState:
        self.provisioner.set_hostname(state.hostname)
        return state

    def install_base_packages(self, state: ProvisionState) -> ProvisionState:
        for pkg in state.packages:
            log.debug("installing base package: name=%s", pkg)
            self.provisioner.package(pkg, PackageAction.INSTALL)
        return state

    def update_os(self, state: ProvisionState) -> ProvisionState:
        self.provisioner.update_os()
        return state

    def configure_repository(self, state: ProvisionState) -> ProvisionState:
        self.provisioner.configure_repository()
        return state

    def install_engine(self, state: ProvisionState) -> ProvisionState:
        self.provisioner.install_engine()
        return state

    def wait_for_engine(self, state: ProvisionState) -> ProvisionState:
        wait_until(
            self.provisioner.daemon_responding,
            timeout=self.readiness_timeout,
            interval=self.readiness_interval,
            what=f"{self.provisioner.engine_service} daemon on {state.hostname}",
            sleep=self.sleep,
        )
        return state

    def make_options_dir(self, state: ProvisionState) -> ProvisionState:
        self.provisioner.make_docker_options_dir()
        return state

    def configure_auth(self, state: ProvisionState) -> ProvisionState:
        # remote paths depend on the host, not on what the caller passed in
        auth = self.provisioner.remote_auth_options(state.auth_options)
        self.auth_backend.configure(self.provisioner, auth)

        options = self.provisioner.generate_docker_options(
            state.engine_options, auth, self.docker_port
        )
        self.provisioner.write_docker_options(options)
        self.provisioner.service(self.provisioner.engine_service, ServiceAction.RESTART)
        return replace(state, auth_options=auth, docker_options=options)

    def configure_swarm(self, state: ProvisionState) -> ProvisionState:
        self.swarm_backend.configure(state.swarm_options, state.auth_options)
        return state

    # ------------------ public API ------------------

    def initial_state(
        self,
        swarm_options: SwarmOptions,
        auth_options: AuthOptions,
        engine_options: EngineOptions,
    ) -> ProvisionState:
        if not engine_options.storage_driver:
            engine_options = engine_options.model_copy(
                update={"storage_driver": self.provisioner.default_storage_driver}
            )
        return ProvisionState(
            hostname=self.provisioner.driver.machine_name,
            packages=tuple(self.provisioner.packages),
            engine_options=engine_options,
            auth_options=auth_options,
            swarm_options=swarm_options,
        )

    def provision(
        self,
        swarm_options: SwarmOptions,
        auth_options: AuthOptions,
        engine_options: EngineOptions,
    ) -> ProvisionState:
        """
        Run the full bootstrap sequence and return the final state.
        """
        state = self.initial_state(swarm_options, auth_options, engine_options)
        ctx = new_ctx(host=state.hostname, run_id=self.run_id)
        steps = self._steps()

        log.info(
            "[%s] provisioning with %s provisioner (storage driver %s)",
            state.hostname,
            self.provisioner.family,
            state.engine_options.storage_driver,
        )
        self.bus.emit(
            ProvisionStarted(**ctx, family=self.provisioner.family, steps=[str(s) for s, _ in steps])
        )

        for step, fn in steps:
            self.bus.emit(StepStarted(**ctx, step=str(step)))
            started = time.monotonic()
            try:
                state = fn(state)
            except ProvisionError as e:
                e.step = step
                log.error("[%s] step %s failed: %s", state.hostname, step, e)
                self.bus.emit(StepFailed(**ctx, step=str(step), error=str(e)))
                self.bus.emit(
                    ProvisionCompleted(
                        **ctx, ok=False, completed=list(state.completed), failed_step=str(step)
                    )
                )
                raise
            state = replace(state, completed=state.completed + (str(step),))
            elapsed = int((time.monotonic() - started) * 1000)
            log.info("[%s] %s (%d ms)", state.hostname, step, elapsed)
            self.bus.emit(StepSucceeded(**ctx, step=str(step), duration_ms=elapsed))

        self.bus.emit(ProvisionCompleted(**ctx, ok=True, completed=list(state.completed)))
        log.info("[%s] provisioning complete", state.hostname)
        return state
