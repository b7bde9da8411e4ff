"""
Utility functions for the Databricks REST toolkit.
"""

import os
import json
import datetime
from typing import Any, Dict, Optional, Union

from dateutil import tz

# Workspace import languages keyed by file extension
LANGUAGE_BY_EXTENSION = {
    ".py": "PYTHON",
    ".r": "R",
    ".sql": "SQL",
    ".scala": "SCALA",
}


def epoch_millis_to_datetime(millis: Union[int, float]) -> datetime.datetime:
    """
    Convert a Databricks timestamp (milliseconds since the epoch) to a datetime.

    Args:
        millis: Milliseconds since 1970-01-01 UTC

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.datetime.fromtimestamp(millis / 1000.0, tz=tz.tzutc())


def load_json_config(config: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Load a JSON job configuration.

    Args:
        config: A dictionary, a path to a JSON file, or a JSON string

    Returns:
        Configuration dictionary (a copy when a dictionary was passed)
    """
    if isinstance(config, dict):
        return json.loads(json.dumps(config))

    if os.path.isfile(config):
        with open(config, 'r') as f:
            return json.load(f)

    try:
        return json.loads(config)
    except json.JSONDecodeError as e:
        raise ValueError(f"Job configuration is neither a JSON file nor a JSON string: {e}") from e


def infer_language(file_path: str) -> Optional[str]:
    """
    Infer the workspace language of a source file from its extension.

    Args:
        file_path: Path of the local file

    Returns:
        Workspace language (PYTHON, R, SQL, SCALA) or None if unknown
    """
    _, ext = os.path.splitext(file_path)
    return LANGUAGE_BY_EXTENSION.get(ext.lower())


def format_size(size_bytes: int) -> str:
    """
    Format a byte size into a human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.23 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024 or unit == 'TB':
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
