#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path

import logging
import sys

import toml
import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("gitrs")

CONFIG_FILENAMES = ['config.json', 'config.toml', 'config.yaml', 'config.yml']


def get_config_dir():
    """Directory holding user configuration (~/.config/gitrs)."""
    return Path.home() / '.config' / 'gitrs'


def get_config_path():
    """Get the path to the configuration file.

    Checks in order:
    1. GITRS_CONFIG environment variable
    2. ~/.config/gitrs/ directory
    """
    # Check for environment variable override
    if 'GITRS_CONFIG' in os.environ:
        path = Path(os.environ['GITRS_CONFIG'])
        if path.exists():
            return path

    config_dir = get_config_dir()
    for filename in CONFIG_FILENAMES:
        path = config_dir / filename
        if path.exists():
            return path

    # If no file exists, return default path for saving
    return config_dir / 'config.json'


def load_config():
    """Load configuration from file."""
    config_path = get_config_path()

    # Start with default config
    config = get_default_config()

    # Load from file if it exists
    if config_path.exists():
        try:
            if config_path.suffix.lower() in ['.toml']:
                with open(config_path, 'rb') as f:
                    file_config = tomllib.load(f)
            elif config_path.suffix.lower() in ['.yaml', '.yml']:
                with open(config_path, 'r') as f:
                    file_config = yaml.safe_load(f) or {}
            else:
                # Default to JSON format
                with open(config_path, 'r') as f:
                    file_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading config from {config_path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")

        # Merge file config with defaults
        config = merge_configs(config, file_config)

    # Apply environment variable overrides
    config = apply_env_overrides(config)

    validate_config(config)
    return config


def save_config(config):
    """Save configuration to file."""
    config_path = get_config_path()

    try:
        # Create directory if it doesn't exist
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.suffix.lower() in ['.toml']:
            with open(config_path, 'w') as f:
                toml.dump(config, f)
        elif config_path.suffix.lower() in ['.yaml', '.yml']:
            with open(config_path, 'w') as f:
                yaml.safe_dump(config, f, default_flow_style=False)
        else:
            # Default to JSON format
            with open(config_path, 'w') as f:
                json.dump(config, f, indent=2)
    except OSError as e:
        raise ConfigError(f"Error saving config to {config_path}: {e}") from e

    logger.info(f"Configuration saved to {config_path}")
    return config_path


def get_default_config():
    """Get default configuration."""
    from .domain.layout import DEFAULT_BRANCH, DEFAULT_CONTROL_DIR, DEFAULT_DESCRIPTION

    return {
        "repository": {
            "control_dir_name": DEFAULT_CONTROL_DIR,
            "default_branch": DEFAULT_BRANCH,
            "description": DEFAULT_DESCRIPTION,
        },
        "storage": {
            "compression_level": -1,
        },
        "logging": {
            "level": "INFO",
            "format": "%(levelname)s: %(message)s"
        },
    }


def validate_config(config):
    """Reject values the storage layer cannot use."""
    level = config.get("storage", {}).get("compression_level", -1)
    if isinstance(level, bool) or not isinstance(level, int) or not -1 <= level <= 9:
        raise ConfigError(f"storage.compression_level must be an integer from -1 to 9, got {level!r}")

    log_level = str(config.get("logging", {}).get("level", "INFO")).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"Unknown logging level: {log_level}")


def configure_logging(config, verbose=False):
    """Apply the logging section of ``config`` to the gitrs logger."""
    log_config = config.get("logging", {})
    level = logging.DEBUG if verbose else getattr(logging, str(log_config.get("level", "INFO")).upper())
    logger.setLevel(level)

    fmt = log_config.get("format")
    if fmt:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(logging.Formatter(fmt))


def merge_configs(base_config, override_config):
    """
    Recursively merge two configuration dictionaries.

    Args:
        base_config (dict): Base configuration
        override_config (dict): Configuration to merge/override with

    Returns:
        dict: Merged configuration
    """
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            # Recursively merge nested dictionaries
            merged[key] = merge_configs(merged[key], value)
        else:
            # Override or add new key
            merged[key] = value

    return merged


def _coerce_env_value(value):
    if value.lower() in ('true', 'yes', 'on'):
        return True
    if value.lower() in ('false', 'no', 'off'):
        return False
    try:
        return int(value)
    except ValueError:
        return value


def apply_env_overrides(config):
    """
    Apply environment variable overrides to configuration.
    Environment variables follow the pattern: GITRS_SECTION_KEY
    For example: GITRS_REPOSITORY_DEFAULT_BRANCH=main
    """
    env_prefix = "GITRS_"

    for env_key, value in os.environ.items():
        if not env_key.startswith(env_prefix) or env_key == "GITRS_CONFIG":
            continue

        key_parts = env_key[len(env_prefix):].lower().split('_')
        typed_value = _coerce_env_value(value)

        current_level = config
        i = 0
        while i < len(key_parts):
            # Find the longest key in current_level that is a prefix of the remaining key_parts
            best_match_len = 0
            matched_key = None

            for config_key in current_level.keys():
                config_key_parts = config_key.split('_')
                if key_parts[i : i + len(config_key_parts)] == config_key_parts:
                    if len(config_key_parts) > best_match_len:
                        best_match_len = len(config_key_parts)
                        matched_key = config_key

            if matched_key is None:
                break

            # If we are at the end of the env var, we have found the key to set
            if i + best_match_len == len(key_parts):
                # Strings stay strings for keys whose default is a string
                if isinstance(current_level[matched_key], str):
                    typed_value = value
                current_level[matched_key] = typed_value
                logger.debug(f"Config override from {env_key}")
                break

            # Otherwise, we descend into the dictionary
            if isinstance(current_level[matched_key], dict):
                current_level = current_level[matched_key]
                i += best_match_len
            else:
                # Path conflict, e.g., env var is longer but we found a non-dict value
                break

    return config
