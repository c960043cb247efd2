"""Duration strings for TTL settings such as ``outlooks.cache_ttl``.

Two spellings are accepted:
- compact: ``30s``, ``15m``, ``2h``, ``60d`` and combinations like ``1d12h``
- ISO-8601: ``PT30S``, ``PT2H``, ``P60D``, ``P1DT12H``
"""

import re
from typing import Iterable, Tuple

UNIT_SECONDS = {
    "d": 86400,
    "h": 3600,
    "m": 60,
    "s": 1,
}

_ISO_PATTERN = re.compile(
    r"^P(?:(?P<d>\d+)D)?(?:T(?:(?P<h>\d+)H)?(?:(?P<m>\d+)M)?(?:(?P<s>\d+(?:\.\d+)?)S)?)?$"
)
_COMPACT_TOKEN = re.compile(r"(\d+)([dhms])")


class DurationParseError(ValueError):
    """A duration string is malformed, zero or out of range."""


def parse_duration(duration_str: str) -> int:
    """
    Convert a duration string to whole seconds.

    Raises:
        DurationParseError: If the string is empty, malformed or zero

    Examples:
        >>> parse_duration("60d")
        5184000
        >>> parse_duration("PT1H30M")
        5400
    """
    text = duration_str.strip()
    if not text:
        raise DurationParseError("Duration string cannot be empty")

    parts = _iso_parts(text) if text[0] in "Pp" else _compact_parts(text)
    total = sum(int(float(amount)) * UNIT_SECONDS[unit] for unit, amount in parts)

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return total


def _iso_parts(text: str) -> Iterable[Tuple[str, str]]:
    match = _ISO_PATTERN.match(text.upper())
    if match is None:
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{text}'. "
            "Expected something like 'P60D', 'PT2H' or 'P1DT12H'"
        )
    return [(unit, amount) for unit, amount in match.groupdict().items() if amount]


def _compact_parts(text: str) -> Iterable[Tuple[str, str]]:
    compact = re.sub(r"\s+", "", text.lower())
    tokens = _COMPACT_TOKEN.findall(compact)

    # The tokens must cover the whole string, e.g. "5minutes" is rejected
    if not tokens or "".join(amount + unit for amount, unit in tokens) != compact:
        raise DurationParseError(
            f"Invalid duration format: '{text}'. "
            "Use digits followed by s, m, h or d, e.g. '30s', '2h', '60d' or '1d12h'"
        )
    return [(unit, amount) for amount, unit in tokens]


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int,
    max_seconds: int,
    label: str = "Duration",
) -> None:
    """
    Reject durations outside ``[min_seconds, max_seconds]``.

    Raises:
        DurationParseError: If the duration is too short or too long
    """
    if not min_seconds <= duration_seconds <= max_seconds:
        problem = "too short" if duration_seconds < min_seconds else "too long"
        bound = (
            f"Minimum is {seconds_to_human_readable(min_seconds)}"
            if duration_seconds < min_seconds
            else f"Maximum is {seconds_to_human_readable(max_seconds)}"
        )
        raise DurationParseError(
            f"{label} {problem}: {seconds_to_human_readable(duration_seconds)}. {bound}."
        )


def seconds_to_human_readable(seconds: int) -> str:
    """Render seconds in the largest whole unit, e.g. "2 hours" or "60 days"."""
    names = {"d": "day", "h": "hour", "m": "minute", "s": "second"}
    unit = next((u for u, size in UNIT_SECONDS.items() if seconds >= size), "s")
    value = seconds // UNIT_SECONDS[unit]
    return f"{value} {names[unit]}{'' if value == 1 else 's'}"
