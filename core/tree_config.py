"""Configuration loading for the cscopetree CLI.

Provides strict/non-strict YAML parsing of an optional config file. In
non-strict mode every problem is logged and the affected value falls back
to its default; in strict mode it raises ``ConfigValidationError``.

Example file::

    encoding: latin-1
    log_level: INFO
    max_version: 15      # optional; omit or null for no limit
    show_line_label: false
"""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, fields
from typing import Any, Optional

import yaml

from cscope.config import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigValidationError(RuntimeError):
    """Raised when strict config validation fails."""


@dataclass(frozen=True)
class TreeConfig:
    """Settings for reading and rendering a database."""

    encoding: str = DEFAULT_ENCODING
    log_level: str = "WARNING"
    max_version: Optional[int] = None
    show_line_label: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _reject(msg: str, strict: bool) -> None:
    if strict:
        raise ConfigValidationError(msg)
    logger.warning("%s; using default", msg)


def load_config_payload(config_path: str, strict: bool = False) -> dict[str, Any]:
    """Load and parse the YAML config file.

    In non-strict mode this returns an empty dict on parse/read failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse config YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        msg = f"Unexpected config payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    return payload


def _resolve_encoding(payload: dict[str, Any], strict: bool) -> str:
    raw = payload.get("encoding", DEFAULT_ENCODING)
    if not isinstance(raw, str) or not raw.strip():
        _reject(f"encoding must be a non-empty string, got {raw!r}", strict)
        return DEFAULT_ENCODING
    try:
        codecs.lookup(raw.strip())
    except LookupError:
        _reject(f"Unknown text encoding '{raw}'", strict)
        return DEFAULT_ENCODING
    return raw.strip()


def _resolve_log_level(payload: dict[str, Any], strict: bool) -> str:
    raw = str(payload.get("log_level", "WARNING")).strip().upper()
    if raw not in _LOG_LEVELS:
        _reject(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {raw!r}", strict)
        return "WARNING"
    return raw


def _resolve_max_version(payload: dict[str, Any], strict: bool) -> Optional[int]:
    raw = payload.get("max_version")
    if raw is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        _reject(f"max_version must be a non-negative integer, got {raw!r}", strict)
        return None
    return raw


def _resolve_show_line_label(payload: dict[str, Any], strict: bool) -> bool:
    raw = payload.get("show_line_label", True)
    if not isinstance(raw, bool):
        _reject(f"show_line_label must be true or false, got {raw!r}", strict)
        return True
    return raw


def load_tree_config(config_path: Optional[str] = None, strict: bool = False) -> TreeConfig:
    """Build a TreeConfig from an optional YAML file.

    Args:
        config_path: Path to the YAML file, or None for defaults.
        strict: Raise on any problem instead of falling back.

    Returns:
        The resolved configuration.

    Raises:
        ConfigValidationError: In strict mode, on unreadable files, unknown
            keys or invalid values.
    """
    if config_path is None:
        return TreeConfig()

    payload = load_config_payload(config_path, strict=strict)

    known = {f.name for f in fields(TreeConfig)}
    unknown = sorted(str(k) for k in payload if k not in known)
    if unknown:
        msg = f"Unknown config keys in {config_path}: {', '.join(unknown)}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring them", msg)

    config = TreeConfig(
        encoding=_resolve_encoding(payload, strict),
        log_level=_resolve_log_level(payload, strict),
        max_version=_resolve_max_version(payload, strict),
        show_line_label=_resolve_show_line_label(payload, strict),
    )
    logger.debug("Loaded config from %s: %s", config_path, config.to_dict())
    return config
