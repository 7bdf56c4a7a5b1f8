"""Display configuration loading and validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from issueview.config import CONFIGURATION_FILE_NAME, DEFAULT_CONFIGURATION
from issueview.models import DisplayConfiguration

logger = logging.getLogger(__name__)

ICON_MAPPINGS = ("type_icons", "status_icons")


class ConfigurationError(RuntimeError):
    """Raised when configuration validation fails."""


def default_display_configuration() -> DisplayConfiguration:
    """Build the display configuration from built-in defaults.

    :return: Default configuration.
    :rtype: DisplayConfiguration
    """
    return DisplayConfiguration.model_validate(DEFAULT_CONFIGURATION)


def load_display_configuration(path: Path) -> DisplayConfiguration:
    """Load a display configuration from disk.

    Icon mappings are merged onto the defaults; every other key replaces
    the default value.

    :param path: Path to the .issueview.yml file.
    :type path: Path
    :return: Loaded configuration.
    :rtype: DisplayConfiguration
    :raises ConfigurationError: If the configuration is invalid or missing.
    """
    if not path.exists():
        raise ConfigurationError("configuration file not found")

    data = _load_configuration_data(path)
    merged = {**DEFAULT_CONFIGURATION, **data}
    for key in ICON_MAPPINGS:
        override = data.get(key)
        if isinstance(override, dict):
            merged[key] = {**DEFAULT_CONFIGURATION[key], **override}

    try:
        configuration = DisplayConfiguration.model_validate(merged)
    except ValidationError as error:
        if _has_unknown_fields(error):
            raise ConfigurationError("unknown configuration fields") from error
        raise ConfigurationError(str(error)) from error

    errors = validate_display_configuration(configuration)
    if errors:
        raise ConfigurationError("; ".join(errors))

    logger.debug("loaded display configuration from %s", path)
    return configuration


def discover_display_configuration(root: Path) -> Optional[Path]:
    """Return the configuration file in ``root`` when one exists."""
    candidate = root / CONFIGURATION_FILE_NAME
    return candidate if candidate.is_file() else None


def _load_configuration_data(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as error:
        raise ConfigurationError(str(error)) from error
    except yaml.YAMLError as error:
        raise ConfigurationError("configuration is invalid yaml") from error

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("configuration must be a mapping")
    return data


def validate_display_configuration(configuration: DisplayConfiguration) -> List[str]:
    """Validate configuration rules beyond schema validation.

    :param configuration: Loaded configuration.
    :type configuration: DisplayConfiguration
    :return: List of validation errors.
    :rtype: List[str]
    """
    errors: List[str] = []
    if "%" not in configuration.date_format:
        errors.append("date_format must contain a strftime directive")
    for key in ICON_MAPPINGS:
        for name, icon in getattr(configuration, key).items():
            if not icon:
                errors.append(f"{key} entry '{name}' must not be empty")
    return errors


def _has_unknown_fields(error: ValidationError) -> bool:
    return any(item.get("type") == "extra_forbidden" for item in error.errors())
