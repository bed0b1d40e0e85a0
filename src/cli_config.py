"""Configuration file loading and precedence for the gomodrules CLI.

Precedence, highest first: CLI flags, environment, configuration file,
built-in defaults. A missing or unreadable configuration file never breaks
the CLI; it is logged and ignored.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants, OutputFormats

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Effective runtime settings after all overrides are applied."""

    goroot: Optional[str] = None
    output_format: Optional[str] = None
    log_level: str = "INFO"

    def tool_environ(self) -> Dict[str, str]:
        """Environment view consulted when locating the go tool."""
        if self.goroot is not None:
            return {Constants.ENV_GOROOT: self.goroot}
        return {}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file.

    Args:
        config_path: Path to the file; ``.json`` files are parsed as JSON,
            everything else as YAML.

    Returns:
        Configuration mapping, empty if the file is absent or invalid.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Failed to load config %s: %s", config_path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", config_path)
        return {}
    return data


def resolve_settings(
    args: Any,
    config: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Merge CLI arguments, environment and configuration into Settings."""
    environ = os.environ if environ is None else environ
    settings = Settings()

    goroot = config.get("goroot")
    if isinstance(goroot, str) and goroot:
        settings.goroot = goroot
    if environ.get(Constants.ENV_GOROOT) is not None:
        settings.goroot = environ[Constants.ENV_GOROOT]
    if getattr(args, "GOROOT", None):
        settings.goroot = args.GOROOT

    output = config.get("output")
    if isinstance(output, dict):
        fmt = str(output.get("format", "")).lower()
        if fmt in Constants.SUPPORTED_FORMATS:
            settings.output_format = fmt
        elif fmt:
            logger.warning("Ignoring unsupported output format in config: %s", fmt)
    if getattr(args, "OUTPUT_FORMAT", None):
        settings.output_format = args.OUTPUT_FORMAT

    level = config.get("log_level")
    if isinstance(level, str) and level.upper() in Constants.LOG_LEVELS:
        settings.log_level = level.upper()
    env_level = environ.get(Constants.ENV_LOG_LEVEL)
    if env_level and env_level.upper() in Constants.LOG_LEVELS:
        settings.log_level = env_level.upper()
    if getattr(args, "LOG_LEVEL", None):
        settings.log_level = args.LOG_LEVEL

    return settings


def infer_output_format(output_path: Optional[str], configured: Optional[str]) -> str:
    """Pick the export format from explicit settings or the output extension."""
    if configured:
        return configured
    if output_path and output_path.lower().endswith(".csv"):
        return OutputFormats.CSV.value
    return OutputFormats.JSON.value
