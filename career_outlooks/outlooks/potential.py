"""Conversion of LMI-EO outlook ratings to a logical scale.

LMI-EO reports "potential" as 0 undetermined, 1 good, 2 limited, 3 fair.
Internally potential runs 0 undetermined, 1 limited, 2 fair, 3 good, so a
higher number is always a better outlook.
"""

from typing import Any, Dict, Optional

from career_outlooks.domain.models import OUTLOOK_LABELS, Outlook

from .exceptions import OutlookResponseError

LMI_TO_LOGICAL = {
    1: 3,
    2: 1,
    3: 2,
}


def remap_potential(raw_potential: Any) -> int:
    """Map an LMI-EO potential value to the logical scale.

    Unknown or unparsable values map to 0 (undetermined).

    Example:
        >>> remap_potential("1")
        3
    """
    try:
        return LMI_TO_LOGICAL.get(int(raw_potential), 0)
    except (TypeError, ValueError):
        return 0


def verbose_outlook(potential: Any) -> str:
    """Label for a logical potential value ("Good", "Fair", "Limited", "Undetermined")."""
    try:
        return OUTLOOK_LABELS.get(int(potential), OUTLOOK_LABELS[0])
    except (TypeError, ValueError):
        return OUTLOOK_LABELS[0]


def outlook_from_record(record: Dict[str, Any], region_id: Optional[int] = None) -> Outlook:
    """Build an Outlook from a raw LMI-EO style record.

    Args:
        record: Mapping with ``noc`` and raw ``potential``; ``title`` and
            ``trends`` are optional
        region_id: Economic region the record was requested for

    Returns:
        Outlook with remapped potential and its label

    Raises:
        OutlookResponseError: If the record has no noc or no potential value
    """
    noc = record.get("noc")
    if noc in (None, ""):
        raise OutlookResponseError("Outlook record has no NOC code")

    raw_potential = record.get("potential")
    if raw_potential in (None, ""):
        raise OutlookResponseError(f"Outlook potential value not found for NOC {noc}")

    potential = remap_potential(raw_potential)
    return Outlook(
        noc=noc,
        potential=potential,
        outlook_verbose=verbose_outlook(potential),
        title=record.get("title"),
        trends=record.get("trends"),
        region_id=record.get("region_id", region_id),
    )
