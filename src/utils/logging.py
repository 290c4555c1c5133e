"""
Logging configuration for the image search tool.

This module provides utilities for configuring logging throughout the application.
Console output goes to stderr so that search results on stdout stay clean.
"""

import logging
import logging.config
import os
import sys
from typing import Dict, Optional, Union

import yaml


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        config_path: Path to logging configuration YAML file
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Enable a rotating file handler writing to this path
    """
    default_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(levelname)s[%(name)s] %(message)s"
            },
            "detailed": {
                "format": (
                    "%(asctime)s - %(name)s - %(levelname)s - "
                    "%(filename)s:%(lineno)d - %(message)s"
                )
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "WARNING",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "": {  # root logger
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": True,
            }
        },
    }

    config: Dict[str, Union[int, Dict]] = default_config

    # Load config from file if provided
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as file:
                file_config = yaml.safe_load(file)
                if file_config:
                    config = file_config
        except (OSError, yaml.YAMLError) as e:
            print(f"Error loading logging config from {config_path}: {e}", file=sys.stderr)
            print("Using default logging configuration", file=sys.stderr)

    # Override log level if provided
    if log_level:
        numeric_level = getattr(logging, log_level.upper(), None)
        if isinstance(numeric_level, int):
            if "" in config.get("loggers", {}):
                config["loggers"][""]["level"] = log_level.upper()
            if "console" in config.get("handlers", {}):
                config["handlers"]["console"]["level"] = log_level.upper()

    # Add a file handler if a log file was requested
    if log_file:
        config.setdefault("handlers", {})["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": log_file,
            "maxBytes": 10485760,  # 10 MB
            "backupCount": 5,
            "encoding": "utf8",
        }
        log_directory = os.path.dirname(log_file)
        if log_directory:
            os.makedirs(log_directory, exist_ok=True)
        root = config.setdefault("loggers", {}).setdefault("", {"handlers": []})
        if "file" not in root.setdefault("handlers", []):
            root["handlers"].append("file")

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Error configuring logging: {e}", file=sys.stderr)
        print("Falling back to basic configuration", file=sys.stderr)
        logging.basicConfig(
            level=logging.WARNING,
            format="%(levelname)s[%(name)s] %(message)s",
            handlers=[logging.StreamHandler(sys.stderr)],
        )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
