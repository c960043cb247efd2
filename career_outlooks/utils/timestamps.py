"""UTC timestamp helpers."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as a timezone-aware datetime.

    Example:
        >>> utc_now().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)
