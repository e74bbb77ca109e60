"""Deployment configuration: enabled modules, conductor endpoint and cell addresses."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .capabilities import Capability, parse_capabilities
from .config import Settings, settings as default_settings


@dataclass(frozen=True)
class DeploymentConfig:
    """Configuration consumed once when resolver sets are built."""

    capabilities: frozenset[Capability]
    conductor_uri: str
    cell_addresses: dict[str, str] = field(default_factory=dict)
    rpc_timeout: float = 30.0

    def cell_address(self, cell: str) -> str:
        """Deployed address of a cell; cells without a mapping are addressed by name."""
        return self.cell_addresses.get(cell, cell)


def load_deployment_config(
    config_path: Path | None = None, settings: Settings | None = None
) -> DeploymentConfig:
    """Load deployment configuration from a YAML file and application settings.

    The YAML file may contain a ``deployment`` block::

        deployment:
          modules: [observation, specification]
          conductor_uri: http://localhost:4000
          cells:
            observation: uhC0kObservationCell

    Values set through ``REA_*`` environment variables take precedence over
    the file.

    Args:
        config_path: Path to YAML configuration file
        settings: Settings to merge (defaults to the global settings)

    Returns:
        DeploymentConfig instance

    Raises:
        ValueError: If the file cannot be parsed or names unknown modules
    """
    settings = settings or default_settings

    config_data: dict[str, Any] = {
        "modules": list(settings.enabled_modules),
        "conductor_uri": settings.conductor_uri,
        "cells": {},
        "rpc_timeout": settings.rpc_timeout,
    }

    if config_path is None and settings.deployment_config_path:
        config_path = Path(settings.deployment_config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to load deployment config from {config_path}: {e}") from e
        if file_config.get("deployment"):
            config_data.update(file_config["deployment"])

    config_data = _apply_settings_overrides(config_data, settings)

    return DeploymentConfig(
        capabilities=parse_capabilities(config_data["modules"]),
        conductor_uri=config_data["conductor_uri"],
        cell_addresses=dict(config_data.get("cells") or {}),
        rpc_timeout=float(config_data.get("rpc_timeout", 30.0)),
    )


def _apply_settings_overrides(config_data: dict[str, Any], settings: Settings) -> dict[str, Any]:
    """Apply explicitly set settings over file configuration."""
    explicit = settings.model_fields_set

    if "enabled_modules" in explicit:
        config_data["modules"] = list(settings.enabled_modules)
    if "conductor_uri" in explicit:
        config_data["conductor_uri"] = settings.conductor_uri
    if "rpc_timeout" in explicit:
        config_data["rpc_timeout"] = settings.rpc_timeout

    # Per-cell addresses merge rather than replace
    if settings.cell_addresses:
        config_data["cells"] = {**(config_data.get("cells") or {}), **settings.cell_addresses}

    return config_data
