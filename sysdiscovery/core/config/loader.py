"""
Configuration loader — reads discovery.yml into a DiscoveryConfig.

The file is optional. Without one, every setting takes its default
and discovery behaves exactly like a bare run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from sysdiscovery.core.models.config import DiscoveryConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "discovery.yml"


class ConfigError(Exception):
    """Raised when the discovery configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for discovery.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to discovery.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> DiscoveryConfig:
    """Load and validate the discovery configuration.

    Args:
        path: Explicit path to a config file. If None, searches upward
            from the cwd.

    Returns:
        Validated DiscoveryConfig (defaults when no file is found).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found — using defaults", CONFIG_FILE)
        return DiscoveryConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading discovery config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return DiscoveryConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "discovery" key or be flat
    if isinstance(data.get("discovery"), dict):
        data = data["discovery"]

    try:
        config = DiscoveryConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid discovery configuration: {e}") from e

    logger.info("Loaded discovery config from %s", path)
    return config
