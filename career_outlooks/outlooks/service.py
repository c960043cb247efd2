"""Enrichment of matched occupations with employment outlooks."""

import logging
from typing import Iterable, List, Optional

from career_outlooks.domain.models import OccupationOutlook
from career_outlooks.logging import get_logger
from career_outlooks.matching.models import MatchResult

from .base import OutlookProvider
from .exceptions import OutlookError

logger = get_logger(__name__, component="outlooks")


class OutlookService:
    """Attaches outlooks to match results.

    Occupations whose outlook is missing, or whose lookup fails, are left out
    of the enriched results and logged; one bad lookup never fails the batch.
    """

    def __init__(
        self,
        provider: OutlookProvider,
        logger_instance: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.logger = logger_instance or logger

    def enrich(self, match_results: Iterable[MatchResult]) -> List[OccupationOutlook]:
        """Return an OccupationOutlook per match result that has an outlook.

        Args:
            match_results: Results from RequirementMatcher.match()

        Returns:
            Enriched results in input order
        """
        enriched = []
        for result in match_results:
            occupation_outlook = self.enrich_one(result)
            if occupation_outlook is not None:
                enriched.append(occupation_outlook)
        return enriched

    def enrich_one(self, result: MatchResult) -> Optional[OccupationOutlook]:
        try:
            outlook = self.provider.get_outlook(result.noc)
        except OutlookError as e:
            self.logger.error(
                f"Outlook lookup failed for NOC {result.noc}",
                extra={
                    "event": "outlooks.enrich.error",
                    "noc": result.noc,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            return None

        if outlook is None:
            self.logger.warning(
                f"Outlook not found for NOC {result.noc}",
                extra={"event": "outlooks.enrich.missing", "noc": result.noc},
            )
            return None

        return OccupationOutlook(
            noc=result.noc,
            title=result.occupation,
            outlook=outlook.outlook_verbose,
            potential=outlook.potential,
            items=list(result.items),
        )
