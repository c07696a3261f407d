"""Configuration loader for the Spark ranking engine."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import RankerConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_LOCATIONS = [
    Path("config.yaml"),
    Path("config") / "config.yaml",
]


def load_config(config_path: Optional[Path] = None) -> tuple[RankerConfig, EnvironmentConfig]:
    """
    Load and validate configuration from YAML and environment variables.

    Lookup order for the YAML file:
    1. config_path if given
    2. SPARK_RANKER_CONFIG environment variable
    3. config.yaml in the current directory
    4. ./config/config.yaml
    5. built-in defaults (every setting has one)

    Args:
        config_path: Optional path to configuration file

    Returns:
        Tuple of (RankerConfig, EnvironmentConfig) with validated configuration

    Raises:
        ConfigurationError: If configuration is invalid or an explicit file is missing
    """
    env_config = load_environment_config()

    config_file = _find_config_file(config_path or env_config.config_path)
    if config_file is None:
        return RankerConfig(), env_config

    config_dict = _read_yaml(config_file)
    return parse_config_dict(config_dict, source=config_file), env_config


def parse_config_dict(config_dict: Optional[dict], source: Optional[Path] = None) -> RankerConfig:
    """
    Validate a raw configuration mapping.

    Args:
        config_dict: Parsed YAML content (None or empty means all defaults)
        source: File the mapping was read from, for error messages

    Returns:
        Validated RankerConfig

    Raises:
        ConfigurationError: If the mapping does not match the schema
    """
    if not config_dict:
        return RankerConfig()

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration root must be a mapping",
            source=source,
            suggestions=["Review config.example.yaml for the expected layout"],
        )

    warning_messages = check_for_warnings(config_dict)
    if warning_messages:
        emit_warnings(warning_messages)

    try:
        return RankerConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError.from_validation_error(
            "Configuration validation failed",
            e,
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
            source=source,
        ) from e


def _read_yaml(config_file: Path) -> Optional[dict]:
    try:
        with open(config_file, "r") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            source=config_file,
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            source=config_file,
            suggestions=[
                f"Ensure {config_file} is readable",
                "Check file permissions",
            ],
        ) from e


def _find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """
    Find configuration file using fallback logic.

    Args:
        config_path: Optional explicit path to config file

    Returns:
        Path to configuration file, or None to use defaults

    Raises:
        ConfigurationError: If an explicit path does not exist
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Omit --config to run with built-in defaults",
                ],
            )
        return config_path

    for candidate in DEFAULT_LOCATIONS:
        if candidate.exists():
            return candidate

    return None
