"""
Timeline configuration management utilities.

Settings are read from an optional timeline_config.yaml at the project root:

    tool_output:
      wrap_column: 120
      detail_max_length: 500

Missing keys keep their defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "timeline_config.yaml"


@dataclass
class TimelineConfig:
    """Presentation settings for hydrated tool output."""

    wrap_column: int = 120  # Hard-wrap column for simplified tool text
    detail_max_length: int = 500  # Tool detail is truncated beyond this


def get_config_path() -> Path:
    """
    Get the path to the timeline configuration file.

    Looks for timeline_config.yaml in the current working directory (project root).
    """
    return Path(os.getcwd()) / CONFIG_FILENAME


def load_timeline_config(path: str | Path | None = None) -> TimelineConfig:
    """
    Load timeline settings from YAML.

    Args:
        path: Explicit config file. When omitted, timeline_config.yaml in the
            working directory is used if it exists, defaults otherwise.

    Returns:
        TimelineConfig with file values applied over the defaults

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If a setting is not a positive integer
        RuntimeError: If the file can't be read or parsed
    """
    explicit = path is not None
    config_path = Path(path) if explicit else get_config_path()
    logger.debug(f"Loading timeline config from: {config_path}")

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"{CONFIG_FILENAME} not found at {config_path}.")
        logger.debug("No timeline config file, using defaults")
        return TimelineConfig()

    try:
        with open(config_path, "r") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(f"Expected a mapping at the top of {config_path}")

        section = raw.get("tool_output") or {}
        if not isinstance(section, dict):
            raise ValueError(f"'tool_output' in {config_path} must be a mapping")

        config = TimelineConfig()
        invalid_fields = []
        for name in ("wrap_column", "detail_max_length"):
            if name not in section:
                continue
            value = section[name]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                invalid_fields.append(name)
                continue
            setattr(config, name, value)

        if invalid_fields:
            raise ValueError(
                f"Settings must be positive integers: {', '.join(invalid_fields)} "
                f"in {config_path}"
            )

        return config
    except ValueError:
        raise
    except Exception as e:
        raise RuntimeError(f"Error loading timeline config: {e}") from e
