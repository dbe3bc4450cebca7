"""
Configuration management for drivesweep.

This module provides configuration models and utilities for loading
and validating configuration from YAML files, environment variables,
and programmatic sources.
"""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from drivesweep.core.models import DuplicateKind
from drivesweep.utils.exceptions import ConfigurationError

MIB = 1024 * 1024


class DetectionConfig(BaseModel):
    """Thresholds and switches for duplicate detection."""

    similarity_threshold: float = Field(
        default=0.8, ge=0.0, le=1.0, description="Name similarity must exceed this to group"
    )
    min_cluster_size: int = Field(
        default=MIB, ge=0, description="Files must be larger than this (bytes) to size-cluster"
    )
    max_time_gap_seconds: int = Field(
        default=3600, ge=0, description="Largest gap between consecutive files in a cluster"
    )
    min_base_length: int = Field(
        default=3, ge=1, description="Shortest base name accepted by pattern strategies"
    )
    fuzzy_warn_threshold: int = Field(
        default=5000, ge=0, description="Warn when fuzzy matching runs on more files than this"
    )
    enabled_strategies: List[DuplicateKind] = Field(
        default_factory=lambda: list(DuplicateKind), description="Strategies to run"
    )

    model_config = ConfigDict(extra="forbid")


class OutputConfig(BaseModel):
    """Configuration for report output."""

    directory: Path = Field(default=Path("results"), description="Output directory for reports")
    format: str = Field(default="json", description="Output format (json, csv, both)")

    model_config = ConfigDict(extra="allow")

    @field_validator("directory")
    @classmethod
    def validate_directory(cls, v: Path) -> Path:
        return Path(v)

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = {"json", "csv", "both"}
        if v.lower() not in valid_formats:
            raise ValueError(f"format must be one of {valid_formats}")
        return v.lower()


class SweepConfig(BaseModel):
    """Main configuration for drivesweep."""

    log_level: str = Field(default="WARNING", description="Default logging level")
    detection: DetectionConfig = Field(
        default_factory=DetectionConfig, description="Detection settings"
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            raise ValueError(f"log_level must be one of {sorted(levels)}")
        return v.upper()


def load_config(config_path: Path) -> SweepConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated SweepConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigurationError: If config is invalid

    Example:
        >>> config = load_config(Path("drivesweep.yml"))
        >>> print(config.detection.similarity_threshold)
        0.8
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=str(config_path)) from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError("Configuration root must be a mapping", path=str(config_path))

    try:
        return SweepConfig(**_expand_env_vars(raw_config))
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", path=str(config_path)) from e


def load_config_from_dict(config_dict: Dict[str, Any]) -> SweepConfig:
    """Load configuration from a dictionary.

    Example:
        >>> config = load_config_from_dict({"detection": {"similarity_threshold": 0.9}})
    """
    return SweepConfig(**_expand_env_vars(config_dict))


def save_config(config: SweepConfig, output_path: Path) -> None:
    """Save configuration to a YAML file.

    Args:
        config: SweepConfig instance to save
        output_path: Path to save the configuration
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = _convert_special_types(config.model_dump(exclude_none=True))

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(
            config_dict,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def _convert_special_types(obj: Any) -> Any:
    """Convert enums and paths to plain YAML scalars."""
    if isinstance(obj, dict):
        return {k: _convert_special_types(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_special_types(item) for item in obj]
    elif isinstance(obj, Enum):
        return obj.value
    elif isinstance(obj, Path):
        return str(obj)
    else:
        return obj


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


def _expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in config.

    Supports ${VAR_NAME} and ${VAR_NAME:-default} syntax. Unknown variables
    without a default are left untouched.
    """
    if isinstance(config, dict):
        return {k: _expand_env_vars(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [_expand_env_vars(item) for item in config]
    elif isinstance(config, str):

        def replace_env_var(match: Any) -> str:
            var_expr = match.group(1)

            if ":-" in var_expr:
                var_name, default = var_expr.split(":-", 1)
                return str(os.getenv(var_name.strip(), default.strip()))

            value = os.getenv(var_expr.strip())
            if value is None:
                return str(match.group(0))
            return str(value)

        return _ENV_PATTERN.sub(replace_env_var, config)
    else:
        return config


def merge_configs(base: SweepConfig, override: Dict[str, Any]) -> SweepConfig:
    """Merge override configuration into base configuration.

    Example:
        >>> merged = merge_configs(SweepConfig(), {"detection": {"min_base_length": 4}})
    """
    merged = _deep_merge(base.model_dump(), override)
    return SweepConfig(**merged)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
