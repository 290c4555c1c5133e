"""
Configuration management for the image search tool.

This module handles loading and validating configuration from YAML files
and environment variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field

from src.utils.environment import get_env, get_env_bool, get_env_float, get_env_list


class RegistriesConfig(BaseModel):
    """Configuration for the registries searched when the term names none."""

    search: List[str] = Field(
        default_factory=lambda: ["docker.io"],
        description="Registries searched, in order, for unqualified terms",
    )
    timeout: float = Field(30.0, description="Per-registry request timeout in seconds")


class SearchDefaults(BaseModel):
    """Default values for search options not given on the command line."""

    limit: int = Field(0, ge=0, description="Default result limit, 0 for none")
    no_trunc: bool = Field(False, description="Do not truncate descriptions")
    tls_verify: Optional[bool] = Field(
        None, description="Require HTTPS and verify certificates, None for default"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field("WARNING", description="Default logging level")
    config_file: Optional[str] = Field(
        None, description="Path to logging configuration file"
    )
    log_file: Optional[str] = Field(None, description="Path to log file")


class Config(BaseModel):
    """Main configuration for the image search tool."""

    registries: RegistriesConfig = Field(default_factory=RegistriesConfig)
    search: SearchDefaults = Field(default_factory=SearchDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug: bool = Field(False, description="Enable debug mode")


def load_config(config_path: Union[str, Path]) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated configuration object

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ValueError: If the configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as file:
            config_data: Dict[str, Any] = yaml.safe_load(file) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid configuration: {e}")

    if not isinstance(config_data, dict):
        raise ValueError(f"Invalid configuration: expected a mapping in {config_path}")

    # Load environment-specific configuration if it exists
    env_config_path = config_path.parent / f"{config_path.stem}.{os.getenv('ENV', 'local')}.yaml"
    if env_config_path.exists():
        with open(env_config_path, "r") as file:
            env_config_data: Dict[str, Any] = yaml.safe_load(file) or {}
            config_data = _deep_merge(config_data, env_config_data)

    try:
        return Config(**config_data)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}")


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values to override in base

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config_from_env() -> Config:
    """
    Load configuration from environment variables.

    Environment variables are prefixed with IMAGE_SEARCH_.

    Examples:
        IMAGE_SEARCH_REGISTRIES=docker.io,quay.io
        IMAGE_SEARCH_TIMEOUT=10
        IMAGE_SEARCH_LOGGING_LEVEL=DEBUG

    Returns:
        Validated configuration object with values from environment variables
    """
    config_data: Dict[str, Any] = {}

    if registries := get_env_list("IMAGE_SEARCH_REGISTRIES"):
        config_data.setdefault("registries", {})["search"] = registries

    if get_env("IMAGE_SEARCH_TIMEOUT") is not None:
        config_data.setdefault("registries", {})["timeout"] = get_env_float(
            "IMAGE_SEARCH_TIMEOUT", 30.0
        )

    if log_level := get_env("IMAGE_SEARCH_LOGGING_LEVEL"):
        config_data.setdefault("logging", {})["level"] = log_level

    if get_env("IMAGE_SEARCH_DEBUG") is not None:
        config_data["debug"] = get_env_bool("IMAGE_SEARCH_DEBUG")

    try:
        return Config(**config_data)
    except Exception as e:
        raise ValueError(f"Invalid environment configuration: {e}")
