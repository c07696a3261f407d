"""Configuration management module for the Spark ranking engine."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_config_dict
from .models import (
    EventRankingOptions,
    LogFormat,
    LogLevel,
    LoggingConfig,
    PoolConfig,
    ProfileRankingOptions,
    RankerConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "parse_config_dict",
    "load_environment_config",
    # Configuration models
    "RankerConfig",
    "ProfileRankingOptions",
    "EventRankingOptions",
    "PoolConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
