"""Configuration loading for the report writer."""

import json
from pathlib import Path
from typing import Any

from actionreports.domain.exceptions import ConfigurationError
from actionreports.domain.models import ReportsConfig

# JSON key -> ReportsConfig field; snake_case field names are accepted too
_FIELDS = {
    "completeHtml": "complete_html",
    "failedHtml": "failed_html",
    "completeJson": "complete_json",
    "strictUnmatched": "strict_unmatched",
}


def _read_flag(data: dict[str, Any], key: str, path: Path) -> bool | None:
    """Extract an optional boolean flag by its JSON or field name.

    Raises:
        ConfigurationError: If the value is present but not a boolean
    """
    field = _FIELDS[key]
    for name in (key, field):
        if name not in data:
            continue
        value = data[name]
        if not isinstance(value, bool):
            raise ConfigurationError(
                f"{path}: '{name}' must be true or false, got {value!r}"
            )
        return value
    return None


def load_reports_config(path: Path) -> ReportsConfig:
    """
    Load which reports to produce from a JSON file.

    Missing flags keep their ReportsConfig defaults.

    Args:
        path: Path to the reports configuration file

    Returns:
        ReportsConfig

    Raises:
        ConfigurationError: If file is missing or invalid
    """
    if not path.exists():
        raise ConfigurationError(f"Reports config file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected dict in {path}, got {type(data).__name__}")

    known = set(_FIELDS) | set(_FIELDS.values())
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown fields in {path}: {', '.join(unknown)}"
        )

    flags: dict[str, bool] = {}
    for key, field in _FIELDS.items():
        value = _read_flag(data, key, path)
        if value is not None:
            flags[field] = value
    return ReportsConfig(**flags)
