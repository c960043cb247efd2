"""Employment outlook lookup and enrichment.

This module provides:
- OutlookProvider: interface for NOC outlook lookups
- StaticOutlookProvider / LmiOutlookClient: file and HTTP API providers
- TTLCache: injectable expiring cache for API lookups
- OutlookService: attaches outlooks to match results
"""

from .base import OutlookProvider
from .cache import TTLCache
from .exceptions import OutlookError, OutlookHTTPError, OutlookResponseError, OutlookTimeoutError
from .factory import get_outlook_provider
from .lmi import LmiOutlookClient
from .potential import outlook_from_record, remap_potential, verbose_outlook
from .service import OutlookService
from .static import StaticOutlookProvider

__all__ = [
    "OutlookProvider",
    "StaticOutlookProvider",
    "LmiOutlookClient",
    "TTLCache",
    "OutlookService",
    "get_outlook_provider",
    "remap_potential",
    "verbose_outlook",
    "outlook_from_record",
    "OutlookError",
    "OutlookHTTPError",
    "OutlookTimeoutError",
    "OutlookResponseError",
]
