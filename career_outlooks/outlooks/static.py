"""Outlook provider backed by a local data file."""

from typing import Any, Dict, Iterable, Optional

from career_outlooks.domain.models import Outlook
from career_outlooks.logging import get_logger

from .base import OutlookProvider
from .potential import outlook_from_record

logger = get_logger(__name__, component="outlooks")


class StaticOutlookProvider(OutlookProvider):
    """Serves outlooks from pre-fetched LMI-EO records.

    Records without a ``region_id`` apply to every region. When several
    records share a NOC, one for the configured region wins.

    Args:
        records: Raw records with ``noc`` and LMI-EO ``potential``
        region_id: Economic region to prefer
    """

    def __init__(self, records: Iterable[Dict[str, Any]], region_id: Optional[int] = None) -> None:
        self.region_id = region_id
        self._outlooks: Dict[str, Outlook] = {}

        for record in records:
            record_region = record.get("region_id")
            if record_region is not None and region_id is not None and record_region != region_id:
                continue
            outlook = outlook_from_record(record, region_id=record_region)
            existing = self._outlooks.get(outlook.noc)
            if existing is None or (existing.region_id is None and record_region is not None):
                self._outlooks[outlook.noc] = outlook

        logger.debug(
            "Static outlooks indexed",
            extra={"event": "outlooks.static.loaded", "count": len(self._outlooks)},
        )

    def get_outlook(self, noc: str) -> Optional[Outlook]:
        return self._outlooks.get(str(noc))
