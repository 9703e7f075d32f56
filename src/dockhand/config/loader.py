# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/dockhand/config/loader.py

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from dockhand.errors import ConfigError

from .models import ProvisionConfig

log = logging.getLogger("dockhand")

CONFIG_ENV = "DOCKHAND_CONFIG"


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = os.path.expandvars(raw)
    return yaml.safe_load(expanded) or {}


def resolve_config_path(path: Optional[str | Path]) -> Path:
    """
    Use the explicit path if given, otherwise ``DOCKHAND_CONFIG``.
    """
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    raise ConfigError(f"no config file given and {CONFIG_ENV} is not set")


def load_config(path: Optional[str | Path] = None) -> ProvisionConfig:
    """
    Load and validate a provisioning config.

    ``${ENV_VAR}`` placeholders anywhere in the file are resolved at load time,
    which keeps passwords and key paths out of the file itself.
    """
    path = resolve_config_path(path)
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = _load_yaml(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    log.debug("Loaded config from %s", path)
    try:
        return ProvisionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e
