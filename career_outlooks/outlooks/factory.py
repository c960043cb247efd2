"""Factory for the configured outlook provider."""

from typing import Optional

from career_outlooks.config.environment import EnvironmentConfig
from career_outlooks.config.exceptions import ConfigurationError
from career_outlooks.config.models import AppConfig, OutlookSource
from career_outlooks.data.loader import load_outlook_records
from career_outlooks.logging import get_logger

from .base import OutlookProvider
from .cache import TTLCache
from .lmi import LmiOutlookClient
from .static import StaticOutlookProvider

logger = get_logger(__name__, component="outlooks")


def get_outlook_provider(
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    cache: Optional[TTLCache] = None,
) -> OutlookProvider:
    """Instantiate the outlook provider selected by ``outlooks.source``.

    Args:
        app_config: Application configuration
        env_config: Environment configuration (API key)
        cache: Cache for the LMI client; a new TTLCache with the configured
            TTL is created when omitted

    Returns:
        StaticOutlookProvider or LmiOutlookClient

    Raises:
        ConfigurationError: If the source is unknown or its settings are incomplete
        DataLoadError: If the static outlooks file cannot be loaded
    """
    settings = app_config.outlooks
    source = settings.source

    logger.debug(
        "Creating outlook provider",
        extra={"event": "outlooks.provider.creating", "source": source, "region_id": settings.region_id},
    )

    if source == OutlookSource.STATIC.value:
        if app_config.data.outlooks_path is None:
            raise ConfigurationError("outlooks.source is 'static' but data.outlooks_path is not set")
        records = load_outlook_records(app_config.data.outlooks_path)
        return StaticOutlookProvider(records, region_id=settings.region_id)

    if source == OutlookSource.LMI.value:
        if not env_config.lmi_api_user_key:
            raise ConfigurationError(
                "LMI_API_USER_KEY is required when outlooks.source is 'lmi'",
                suggestions=["Set LMI_API_USER_KEY in the environment or .env file"],
            )
        return LmiOutlookClient(
            user_key=env_config.lmi_api_user_key,
            base_url=settings.base_url,
            region_id=settings.region_id,
            timeout=settings.http_request_timeout,
            user_agent=settings.user_agent,
            cache=cache if cache is not None else TTLCache(settings.cache_ttl_seconds),
        )

    raise ConfigurationError(
        f"Unknown outlook source: {source}. Supported sources: "
        f"{', '.join(s.value for s in OutlookSource)}"
    )
