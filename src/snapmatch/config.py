"""
Configuration loading for snapmatch
Redactions and filter switches live in an optional JSON5 file
"""

import os
import re
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import fastjsonschema
import pyjson5

from .data import Data
from .exceptions import ConfigError
from .filter.exceptions import RedactionError
from .filter.normalize import (
    TextFilter,
    apply_text_filter,
    normalize_newlines,
    normalize_paths,
    strip_ansi,
)
from .filter.redact import Redactions, builtin_redactions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SNAPMATCH_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".snapmatch" / "config.json5"

_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "redactions": {
            "type": "object",
            "propertyNames": {"pattern": r"^\[[A-Z_]+\]$"},
            "additionalProperties": {
                "oneOf": [
                    {"type": "string"},
                    {
                        "type": "object",
                        "required": ["path"],
                        "properties": {"path": {"type": "string"}},
                        "additionalProperties": False,
                    },
                    {
                        "type": "object",
                        "required": ["regex"],
                        "properties": {"regex": {"type": "string"}},
                        "additionalProperties": False,
                    },
                ]
            },
        },
        "builtin_redactions": {"type": "boolean"},
        "strip_ansi": {"type": "boolean"},
        "normalize_newlines": {"type": "boolean"},
        "normalize_paths": {"type": "boolean"},
        "log_level": {"type": "string"},
    },
    "additionalProperties": False,
}

_VALIDATE = fastjsonschema.compile(_CONFIG_SCHEMA)

_config: Optional["MatchConfig"] = None
_config_lock = threading.Lock()


@dataclass
class MatchConfig:
    """Settings shared by every comparison in a run"""

    redactions: Dict[str, Any] = field(default_factory=dict)
    builtin_redactions: bool = False
    strip_ansi: bool = False
    normalize_newlines: bool = True
    normalize_paths: bool = False
    log_level: str = "INFO"
    source: Optional[Path] = None

    def text_filters(self) -> List[TextFilter]:
        filters: List[TextFilter] = []
        if self.strip_ansi:
            filters.append(strip_ansi)
        if self.normalize_newlines:
            filters.append(normalize_newlines)
        if self.normalize_paths:
            filters.append(normalize_paths)
        return filters

    def prepare(self, data: Data) -> Data:
        """Run the enabled text filters over ``data``"""
        for func in self.text_filters():
            data = apply_text_filter(data, func)
        return data


def _resolve_path(path: Optional[Union[str, Path]]) -> tuple:
    if path is not None:
        return Path(path), True
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Optional[Union[str, Path]] = None) -> MatchConfig:
    """
    Load configuration with smart defaults

    An explicitly named file (argument or environment variable) must exist
    and validate; the default location is optional.
    """
    config_path, explicit = _resolve_path(path)
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return MatchConfig()

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = pyjson5.load(handle)
    except Exception as exc:
        raise ConfigError(f"Failed to load configuration {config_path}: {exc}") from exc

    try:
        _VALIDATE(payload)
    except fastjsonschema.JsonSchemaException as exc:
        raise ConfigError(f"Invalid configuration {config_path}: {exc.message}") from exc

    logger.debug("Loaded configuration from %s", config_path)
    return MatchConfig(
        redactions=dict(payload.get("redactions", {})),
        builtin_redactions=payload.get("builtin_redactions", False),
        strip_ansi=payload.get("strip_ansi", False),
        normalize_newlines=payload.get("normalize_newlines", True),
        normalize_paths=payload.get("normalize_paths", False),
        log_level=payload.get("log_level", "INFO"),
        source=config_path,
    )


def get_config() -> MatchConfig:
    """Return the process-wide configuration, loading it once"""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = load_config()
    return _config


def reset_config() -> None:
    global _config
    with _config_lock:
        _config = None


def build_redactions(config: MatchConfig) -> Redactions:
    """Turn the configured redaction table into a :class:`Redactions`"""
    redactions = builtin_redactions() if config.builtin_redactions else Redactions()
    for placeholder, value in config.redactions.items():
        if isinstance(value, dict) and "regex" in value:
            try:
                value = re.compile(value["regex"])
            except re.error as exc:
                raise ConfigError(f"Bad regex for {placeholder}: {exc}") from exc
        elif isinstance(value, dict):
            value = Path(value["path"]) if value["path"] else ""
        try:
            redactions.insert(placeholder, value)
        except RedactionError as exc:
            raise ConfigError(str(exc)) from exc
    return redactions
