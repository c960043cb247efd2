"""Configuration management for career outlook matching."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config
from .models import (
    AppConfig,
    DataConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    MatchingConfig,
    OutlookSource,
    OutlooksConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "DataConfig",
    "MatchingConfig",
    "OutlooksConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "OutlookSource",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
