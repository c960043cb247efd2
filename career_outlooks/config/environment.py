"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError
from .models import LogLevel, OutlookSource

VALID_LOG_LEVELS = [level.value for level in LogLevel]


class EnvironmentConfig:
    """Values read from the process environment."""

    def __init__(
        self,
        lmi_api_user_key: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.lmi_api_user_key = lmi_api_user_key
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config(outlook_source: str = OutlookSource.STATIC.value) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Environment variables:
    - LMI_API_USER_KEY: API key for the LMI Employment Outlook API
      (required when outlook_source is "lmi")
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Label attached to log records (default: local)

    Args:
        outlook_source: Configured outlook source, decides whether the API key is required

    Returns:
        EnvironmentConfig with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    lmi_api_user_key = os.getenv("LMI_API_USER_KEY")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if outlook_source == OutlookSource.LMI.value and not lmi_api_user_key:
        errors.append(
            "Missing required environment variable: LMI_API_USER_KEY "
            "(needed when outlooks.source is 'lmi')"
        )

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Switch outlooks.source to 'static' to run without an API key",
            ],
        )

    return EnvironmentConfig(
        lmi_api_user_key=lmi_api_user_key,
        log_level=log_level,
        environment=environment,
    )
