"""Loads YAML/JSON configuration files and global runtime settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


def load_config(path: str) -> Dict[str, Any]:
    """Load a YAML or JSON configuration file."""
    path_p = Path(path)
    with open(path_p, "r", encoding="utf-8") as f:
        if path_p.suffix in {".yaml", ".yml"}:
            return yaml.safe_load(f) or {}
        if path_p.suffix == ".json":
            return json.load(f)
        raise ValueError("Unsupported config format")


def load_meta_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Return the package configuration, or ``{}`` if no file exists."""
    if path is None:
        path = Path(__file__).resolve().parents[2] / "configs" / "dyarr_config.yaml"
    if path.exists():
        return load_config(str(path))
    return {}


META_CONFIG: Dict[str, Any] = load_meta_config()
LOG_LEVEL: str = str(META_CONFIG.get("log_level", "WARNING"))
LOG_FILE: Optional[str] = META_CONFIG.get("log_file") or None
TRACE_OFFSETS: bool = bool(META_CONFIG.get("trace_offsets", False))


def set_trace_offsets(value: bool) -> None:
    """Enable or disable debug logging of every computed offset."""
    global TRACE_OFFSETS
    TRACE_OFFSETS = value
    META_CONFIG["trace_offsets"] = value


def set_log_level(value: str) -> None:
    """Override the log level of the ``dyarr`` loggers at runtime."""
    global LOG_LEVEL
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    LOG_LEVEL = value.upper()
    META_CONFIG["log_level"] = LOG_LEVEL
    logging.getLogger("dyarr").setLevel(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("dyarr.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


__all__ = [
    "load_config",
    "load_meta_config",
    "META_CONFIG",
    "LOG_LEVEL",
    "LOG_FILE",
    "TRACE_OFFSETS",
    "set_trace_offsets",
    "set_log_level",
]
