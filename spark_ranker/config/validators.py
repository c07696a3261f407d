"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

from pydantic import ValidationError


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are legal but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    profiles = _section(config_dict, "profiles")
    events = _section(config_dict, "events")
    pools = _section(config_dict, "pools")

    for name, section in (("profiles", profiles), ("events", events)):
        limit = section.get("limit")
        if isinstance(limit, int) and limit > 20:
            warning_messages.append(
                f"Large {name}.limit ({limit}) produces shortlists too long for the assistant prompt"
            )

    min_score = profiles.get("min_keyword_score")
    if isinstance(min_score, (int, float)) and min_score > 0.5:
        warning_messages.append(
            f"Strict profiles.min_keyword_score ({min_score}) will filter out most candidates"
        )

    for pool_key, section_name, section in (
        ("profile_pool_size", "profiles", profiles),
        ("event_pool_size", "events", events),
    ):
        pool_size = pools.get(pool_key)
        limit = section.get("limit", 5)
        if isinstance(pool_size, int) and isinstance(limit, int) and pool_size < limit:
            warning_messages.append(
                f"pools.{pool_key} ({pool_size}) is smaller than {section_name}.limit ({limit})"
            )
        if isinstance(pool_size, int) and pool_size > 200:
            warning_messages.append(
                f"Large pools.{pool_key} ({pool_size}) may slow down per-request ranking"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)


def describe_validation_error(error: ValidationError) -> List[str]:
    """
    Convert a pydantic ValidationError into user-friendly messages.

    Args:
        error: ValidationError raised by model validation

    Returns:
        One message per failing field
    """
    messages = []
    for detail in error.errors():
        field_path = " -> ".join(str(loc) for loc in detail["loc"]) or "(root)"
        error_type = detail["type"]

        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type in ("string_type", "int_type", "float_type", "bool_type", "list_type"):
            expected_type = error_type.replace("_type", "")
            messages.append(
                f"Invalid type for '{field_path}': expected {expected_type}, "
                f"got {detail.get('input')!r}"
            )
        elif "enum" in error_type:
            messages.append(f"Invalid value for '{field_path}': {detail['msg']}")
        else:
            messages.append(f"{field_path}: {detail['msg']}")
    return messages


def _section(config_dict: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = config_dict.get(key)
    return section if isinstance(section, dict) else {}
