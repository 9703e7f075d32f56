# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/config/models.py

from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from dockhand.provision.models import AuthOptions, EngineOptions, RepoCoordinate, SwarmOptions


class HostSpec(BaseModel):
    """An existing machine reachable over SSH."""

    machine_name: str             # logical hostname to set (e.g. 'engine-1')
    address: str                  # IP or DNS to connect
    username: str = "root"
    port: int = 22
    password: Optional[str] = None
    pkey_path: Optional[Path] = None


class RepoSpec(BaseModel):
    family: str
    version: str

    def coordinate(self) -> RepoCoordinate:
        return RepoCoordinate(family=self.family, version=self.version)


class ReadinessSpec(BaseModel):
    timeout: float = 180.0
    interval: float = 3.0


class ProvisionConfig(BaseModel):
    host: HostSpec
    driver_name: str = "generic"
    docker_port: int = 2376
    packages: Optional[List[str]] = None     # None keeps the family's defaults
    engine: EngineOptions = Field(default_factory=EngineOptions)
    auth: AuthOptions = Field(default_factory=AuthOptions)
    swarm: SwarmOptions = Field(default_factory=SwarmOptions)
    readiness: ReadinessSpec = Field(default_factory=ReadinessSpec)
    # os-release ID -> repository; None keeps the built-in table
    repositories: Optional[Dict[str, RepoSpec]] = None
    upload_certs: bool = True

    def repo_table(self) -> Optional[Dict[str, RepoCoordinate]]:
        if self.repositories is None:
            return None
        return {os_id: spec.coordinate() for os_id, spec in self.repositories.items()}
