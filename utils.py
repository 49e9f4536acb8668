# utils.py
"""
Utility functions for the simulation framework.

This module provides logging setup and configuration loading, which are
used across the application but do not belong to the physics or
rendering code.
"""
import copy
import logging
import logging.handlers
import json
import os
from typing import Dict, Any, Optional

from constants import DEFAULT_CONFIG

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys. A null "log_file" disables
#       the file handler.
#   - Outputs: None
#   - Side Effects: Configures the root Python logger. Creates the log
#     directory if needed. Installs a console handler and, unless
#     disabled, a rotating file handler.
#
# load_config(path: str, defaults: Optional[Dict]) -> Dict[str, Any]:
#   - Outputs: The file's sections merged over the defaults. Keys missing
#     from the file keep their default values.
#   - Errors: FileNotFoundError and json.JSONDecodeError are logged and
#     re-raised.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the root logger from a configuration dictionary.
    """
    log_config = config.get('logging', {})
    log_level = str(log_config.get('level', 'INFO')).upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/particles.log')

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Re-running setup must not stack handlers.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        # 1MB per file, 5 backups.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}, file: {log_file_path or 'disabled'}.")


def merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merges `overrides` onto a deep copy of `defaults`."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: str, defaults: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Loads a JSON configuration file on top of the built-in defaults."""
    if defaults is None:
        defaults = DEFAULT_CONFIG
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            user_config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise

    config = merge_config(defaults, user_config)
    logging.info("Configuration loaded successfully.")
    return config
