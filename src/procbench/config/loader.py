"""Reads the procbench TOML settings file into a plain dictionary."""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "settings file") -> Dict[str, Any]:
    """
    Parse one TOML file.

    Args:
        file_path: File to read
        description: Name of the file used in log lines and errors

    Returns:
        The top-level TOML table

    Raises:
        FileNotFoundError: If `file_path` does not exist
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    logger.info(f"Reading procbench {description}: {file_path}")

    if not file_path.exists():
        logger.error(f"Missing procbench {description}: {file_path}")
        raise FileNotFoundError(f"procbench {description} does not exist: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"decoding procbench {description} {file_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """Read the benchmark and collector tables from config.toml."""
    return load_toml_file(config_path, "settings file")
