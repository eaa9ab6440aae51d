"""Utility functions for loading definition documents.

This module provides functions for loading JSON documents from files with
proper error handling and validation.
"""

import json
import time
from pathlib import Path
from typing import Any

from .logging_config import get_logger

logger = get_logger(__name__)


class DocumentLoadError(Exception):
    """Custom exception for JSON document loading errors."""

    pass


def load_json_from_file(file_path: str | Path) -> Any:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Parsed JSON data.

    Raises:
        FileNotFoundError: If file doesn't exist.
        DocumentLoadError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.debug(f"Loaded definition document {file_path}")
        return data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise DocumentLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise DocumentLoadError(f"Error reading file {file_path}: {e}") from e


def load_json_object(file_path: str | Path) -> dict[str, Any]:
    """Load a JSON file whose top level must be an object.

    Raises:
        FileNotFoundError: If file doesn't exist.
        DocumentLoadError: If the file is unreadable or not a JSON object.
    """
    data = load_json_from_file(file_path)
    if not isinstance(data, dict):
        raise DocumentLoadError(f"File must contain a JSON object: {file_path}")
    return data


class Timer:
    """Wall-clock stopwatch used for the run summaries."""

    def __init__(self) -> None:
        self.start = time.perf_counter()

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was created, rounded to milliseconds."""
        return round(time.perf_counter() - self.start, 3)
