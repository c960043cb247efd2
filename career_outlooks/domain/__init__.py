"""Domain models for career outlook matching."""

from .models import (
    JobRef,
    OccupationOutlook,
    OccupationRef,
    Outlook,
    Program,
    RequirementDocument,
    UnitGroup,
)

__all__ = [
    "OccupationRef",
    "RequirementDocument",
    "UnitGroup",
    "Program",
    "JobRef",
    "Outlook",
    "OccupationOutlook",
]
