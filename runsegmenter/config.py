# -*- coding: utf-8 -*-
"""
RU: Параметры сегментации (запасная письменность и т. п.) с валидацией.
EN: Run segmentation settings with validation.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional

from runsegmenter.exceptions import ConfigurationError
from runsegmenter.model.enums import DEFAULT_FALLBACK_SCRIPT, Script

logger: Final = logging.getLogger(__name__)

FALLBACK_SCRIPT_ENV: Final[str] = "RUNSEGMENTER_FALLBACK_SCRIPT"
DEFAULT_CONFIG_FILE: Final[str] = "runsegmenter.json"


@dataclass(frozen=True)
class SegmenterConfig:
    """
    Run segmentation parameters.

    Attributes:
        fallback_script: Script assigned to text that contains no determinate script
            at all (only punctuation, symbols, emoji, combining marks...). Defaults to
            ``Script.COMMON``; pipelines that prefer to shape such text with a fixed
            script (for example ``Script.LATIN``) can override it.

    Examples:
        >>> SegmenterConfig().fallback_script
        <Script.COMMON: 'Zyyy'>

        >>> SegmenterConfig.from_mapping({"fallback_script": "Latin"}).fallback_script
        <Script.LATIN: 'Latn'>
    """

    fallback_script: Script = DEFAULT_FALLBACK_SCRIPT

    def __post_init__(self) -> None:
        """Validate parameters."""
        if not isinstance(self.fallback_script, Script):
            raise ConfigurationError(
                f"fallback_script must be Script, got {type(self.fallback_script).__name__}"
            )

    @staticmethod
    def from_mapping(mapping: Mapping[str, Any]) -> "SegmenterConfig":
        """
        Create configuration from a plain mapping (e.g. parsed JSON).

        Unknown keys are ignored. ``fallback_script`` accepts a Script, an ISO 15924
        code or a Unicode long name.

        Raises:
            ConfigurationError: If a value cannot be converted.
        """
        config = SegmenterConfig()
        value = mapping.get("fallback_script")
        if value is not None:
            config = replace(config, fallback_script=_parse_script(value))
        return config

    def with_environment(self, environ: Mapping[str, str] = os.environ) -> "SegmenterConfig":
        """Return a copy with ``RUNSEGMENTER_FALLBACK_SCRIPT`` applied, if set."""
        value = environ.get(FALLBACK_SCRIPT_ENV)
        if not value:
            return self
        logger.debug("Fallback script overridden from environment: %s", value)
        return replace(self, fallback_script=_parse_script(value))

    def to_dict(self) -> dict[str, Any]:
        return {"fallback_script": self.fallback_script.value}


def _parse_script(value: Any) -> Script:
    if isinstance(value, Script):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"fallback_script must be a script code or name, got {type(value).__name__}"
        )
    try:
        return Script.from_name(value)
    except ValueError as exc:
        raise ConfigurationError(str(exc), cause=exc) from exc


DEFAULT_CONFIG: Final[SegmenterConfig] = SegmenterConfig()

# Значения конфигурации по умолчанию
_DEFAULT_CONFIG: Final[Dict[str, Any]] = DEFAULT_CONFIG.to_dict()


def load_config(
    config_path: Optional[Path] = None,
    environ: Mapping[str, str] = os.environ,
) -> SegmenterConfig:
    """
    Load segmentation settings from a JSON file, or use the defaults.

    The file must contain a JSON object; its keys are merged over the defaults.
    A missing file, unreadable file, invalid JSON or non-object content is logged
    and the defaults are used instead. ``RUNSEGMENTER_FALLBACK_SCRIPT`` in
    ``environ`` overrides the file value.

    Args:
        config_path: Path to the JSON file. If None, looks for ``runsegmenter.json``
            in the current directory.
        environ: Environment mapping consulted for overrides.

    Returns:
        A validated SegmenterConfig.

    Raises:
        ConfigurationError: If a value in the file or environment is invalid.

    Example:
        >>> config = load_config(Path("settings/runsegmenter.json"))
        >>> config.fallback_script
        <Script.LATIN: 'Latn'>
    """
    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILE)

    values = dict(_DEFAULT_CONFIG)

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Config file must contain a JSON object, got {type(user_config).__name__}"
                )

            values.update(user_config)
            logger.info(f"Configuration loaded from {config_path}")
            logger.debug(f"Configuration: {values}")

        except json.JSONDecodeError as e:
            logger.warning(
                f"Cannot parse {config_path}: invalid JSON at line {e.lineno}, "
                f"column {e.colno}. Using default configuration."
            )
        except OSError as e:
            logger.warning(f"Cannot read {config_path}: {e}. Using default configuration.")
        except ValueError as e:
            logger.warning(f"Invalid configuration format: {e}. Using default configuration.")
    else:
        logger.debug(f"Config file {config_path} not found. Using default configuration.")

    return SegmenterConfig.from_mapping(values).with_environment(environ)


__all__ = [
    "SegmenterConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "FALLBACK_SCRIPT_ENV",
    "load_config",
]
