"""
Timeline configuration utilities.

Usage:
    from timeline.config import load_timeline_config

    config = load_timeline_config()
"""

from timeline.config.loader import (
    TimelineConfig,
    get_config_path,
    load_timeline_config,
)

__all__ = ["TimelineConfig", "load_timeline_config", "get_config_path"]
