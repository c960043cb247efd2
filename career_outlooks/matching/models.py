"""Data models produced by the requirement matcher."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from career_outlooks.domain.models import OccupationRef


@dataclass(frozen=True)
class MatchResult:
    """A requirement document reduced to the items that matched.

    Attributes:
        unit_group: Occupation the requirements belong to
        requirements: The document's complete item list, in original order
        items: Only the items that satisfied a term pair, in original order
    """

    unit_group: OccupationRef
    requirements: Tuple[str, ...]
    items: Tuple[str, ...]

    @property
    def noc(self) -> str:
        return self.unit_group.noc

    @property
    def occupation(self) -> str:
        return self.unit_group.occupation

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form for JSON output."""
        return {
            "unit_group": {"noc": self.noc, "occupation": self.occupation},
            "requirements": list(self.requirements),
            "items": list(self.items),
        }
