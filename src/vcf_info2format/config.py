"""Configuration file support for vcf-info2format."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .reporting import DEFAULT_REPORT_INTERVAL

logger = logging.getLogger(__name__)

CONFIG_SECTION = "vcf_info2format"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

VALID_FIELDS = {
    "input_path",
    "output_path",
    "fields",
    "transfer_qual",
    "report_interval",
    "log_level",
}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class TransferConfig:
    """Configuration for moving INFO fields into FORMAT fields."""

    input_path: str = "-"
    output_path: str = "-"
    fields: list[str] = field(default_factory=list)
    transfer_qual: bool = False
    report_interval: int = DEFAULT_REPORT_INTERVAL
    log_level: str = "WARNING"

    @property
    def has_work(self) -> bool:
        return bool(self.fields) or self.transfer_qual


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    if "report_interval" in config_dict:
        interval = config_dict["report_interval"]
        if not isinstance(interval, int) or isinstance(interval, bool):
            raise ConfigValidationError(
                f"report_interval must be an integer, got {type(interval).__name__}"
            )
        if interval <= 0:
            raise ConfigValidationError(f"report_interval must be positive, got {interval}")

    if "fields" in config_dict:
        fields = config_dict["fields"]
        if not isinstance(fields, list) or not all(isinstance(f, str) and f for f in fields):
            raise ConfigValidationError("fields must be a list of non-empty strings")

    if "transfer_qual" in config_dict:
        if not isinstance(config_dict["transfer_qual"], bool):
            raise ConfigValidationError(
                f"transfer_qual must be a boolean, got "
                f"{type(config_dict['transfer_qual']).__name__}"
            )

    for key in ("input_path", "output_path"):
        if key in config_dict and not isinstance(config_dict[key], str):
            raise ConfigValidationError(
                f"{key} must be a string, got {type(config_dict[key]).__name__}"
            )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> TransferConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        TransferConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = toml_data.get(CONFIG_SECTION, {})

    unknown = set(config_dict) - VALID_FIELDS
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(sorted(unknown)))

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)

    filtered_config = {k: v for k, v in config_dict.items() if k in VALID_FIELDS}
    if "log_level" in filtered_config:
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return TransferConfig(**filtered_config)
