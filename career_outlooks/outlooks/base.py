"""Base class for employment outlook providers."""

from abc import ABC, abstractmethod
from typing import Optional

from career_outlooks.domain.models import Outlook


class OutlookProvider(ABC):
    """Looks up the employment outlook for a NOC code.

    Implementations return None when the source has no outlook for the code
    and raise OutlookError subclasses when the lookup itself fails.
    """

    @abstractmethod
    def get_outlook(self, noc: str) -> Optional[Outlook]:
        """Return the outlook for a NOC code, or None if unknown.

        Raises:
            OutlookError: On lookup failures (HTTP errors, malformed payloads)
        """
        pass
