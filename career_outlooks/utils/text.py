"""Text helpers for keyword input and display titles."""

import re
from typing import Iterable, List, Union

_SEPARATOR_PATTERN = re.compile(r"([-_])(\w)")


def split_keywords(value: Union[str, Iterable[str], None]) -> List[str]:
    """Coerce keyword input into a list of terms.

    A list (or other iterable) passes through with blank entries removed.
    A string containing commas is split on commas; any other string becomes
    a one-element list. Pieces are trimmed and empty pieces dropped.

    Args:
        value: Keyword string, iterable of strings, or None

    Returns:
        List of keyword strings (possibly empty)

    Example:
        >>> split_keywords("welding, fabrication")
        ['welding', 'fabrication']
        >>> split_keywords("practical nursing")
        ['practical nursing']
    """
    if value is None:
        return []

    if isinstance(value, str):
        pieces = value.split(",") if "," in value else [value]
    else:
        pieces = list(value)

    return [piece.strip() for piece in pieces if isinstance(piece, str) and piece.strip()]


def _title_case_word(word: str) -> str:
    # Dotted acronyms such as "b.sc." capitalize every segment
    if word.count(".") > 1:
        return ".".join(segment[:1].upper() + segment[1:] for segment in word.split("."))

    word = _SEPARATOR_PATTERN.sub(lambda m: m.group(1) + m.group(2).upper(), word)
    return word[:1].upper() + word[1:]


def title_case(text: str) -> str:
    """Title case a string, leaving bracketed portions untouched.

    Characters following ``-`` or ``_`` are capitalized as well, and dotted
    acronyms are capitalized segment by segment.

    Args:
        text: Input string

    Returns:
        Title-cased string

    Raises:
        ValueError: If text is empty or None

    Example:
        >>> title_case("welders and related machine operators")
        'Welders And Related Machine Operators'
        >>> title_case("early childhood educators (ece)")
        'Early Childhood Educators (ece)'
    """
    if not text:
        raise ValueError(f"title_case() requires a non-empty string, got: {text!r}")

    start = text.find("(")
    end = text.find(")", start + 1) if start != -1 else -1
    if start != -1 and end != -1:
        before = text[:start]
        bracketed = text[start:end + 1]
        after = text[end + 1:]
        return (
            (title_case(before) if before else "")
            + bracketed
            + (title_case(after) if after else "")
        )

    return " ".join(_title_case_word(word) for word in text.split(" "))
