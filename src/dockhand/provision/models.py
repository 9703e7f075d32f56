# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/provision/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class OsReleaseInfo:
    """
    Identity of the target OS as reported by /etc/os-release.
    """
    id: str
    version: str = ""
    name: str = ""
    id_like: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RepoCoordinate:
    family: str       # repository family, e.g. 'centos'
    version: str      # repository release, e.g. '7'


class AuthOptions(BaseModel):
    """Certificate locations, locally and on the provisioned host."""

    ca_cert_path: str = ""
    server_cert_path: str = ""
    server_key_path: str = ""
    ca_cert_remote_path: str = ""
    server_cert_remote_path: str = ""
    server_key_remote_path: str = ""


class EngineOptions(BaseModel):
    storage_driver: str = ""
    labels: List[str] = Field(default_factory=list)
    insecure_registry: List[str] = Field(default_factory=list)
    registry_mirror: List[str] = Field(default_factory=list)
    arbitrary_flags: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)


class SwarmOptions(BaseModel):
    is_swarm: bool = False
    master: bool = False
    discovery: str = ""
    host: str = "tcp://0.0.0.0:3376"
    strategy: str = "spread"
    image: str = "swarm:latest"
    arbitrary_flags: List[str] = Field(default_factory=list)


@dataclass(frozen=True)
class EngineConfigContext:
    """
    Everything the engine unit template needs. Built per render, never kept.
    """
    docker_port: int
    auth_options: AuthOptions
    engine_options: EngineOptions
    docker_options_dir: str


@dataclass(frozen=True)
class DockerOptions:
    content: str
    path: str


@dataclass(frozen=True)
class ProvisionState:
    """
    Record threaded through the orchestrator. Steps return an updated copy.
    """
    hostname: str
    packages: Tuple[str, ...]
    engine_options: EngineOptions
    auth_options: AuthOptions
    swarm_options: SwarmOptions
    completed: Tuple[str, ...] = ()
    docker_options: Optional[DockerOptions] = None
