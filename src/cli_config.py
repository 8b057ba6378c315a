"""Configuration loading and CLI overrides for the tag filter.

CLI flags take precedence over the config file. A missing or unreadable
config file is reported and treated as empty.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load configuration from a YAML or JSON file.

    Args:
        config_path: Path to the config file, or None.

    Returns:
        Config mapping; empty when no usable file was given.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            if config_path.lower().endswith(Constants.CONFIG_EXTENSIONS_YAML):
                data = yaml.safe_load(fh)
            else:
                data = json.load(fh)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as exc:
        logger.error("Failed to load config %s: %s", config_path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", config_path)
        return {}
    return data


def resolve_tag_settings(args, config: Dict[str, Any]) -> Tuple[List[str], bool]:
    """Merge the tag filter settings from CLI args and config.

    Returns:
        Tuple of (allowed tag names, keep_synthetic flag).
    """
    section = config.get(Constants.CONFIG_SECTION_TAGS) or {}
    if not isinstance(section, dict):
        logger.warning("Ignoring '%s' config section: not a mapping", Constants.CONFIG_SECTION_TAGS)
        section = {}

    allowed = list(getattr(args, "TAG_FILTER", None) or [])
    if not allowed:
        configured = section.get(Constants.CONFIG_KEY_FILTER) or []
        if isinstance(configured, str):
            configured = [configured]
        allowed = [str(entry) for entry in configured]

    keep_synthetic = getattr(args, "KEEP_SYNTHETIC", None)
    if keep_synthetic is None:
        keep_synthetic = bool(section.get(Constants.CONFIG_KEY_KEEP_SYNTHETIC, False))

    return allowed, bool(keep_synthetic)
