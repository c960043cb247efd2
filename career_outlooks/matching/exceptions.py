"""Exceptions raised by the matching engine."""

from typing import Any, Iterable, Optional


class MatchingError(Exception):
    """Base exception for matching engine errors."""

    pass


class InvalidCredentialError(MatchingError):
    """Credential label is not one the expander knows.

    Raised instead of returning an empty synonym set so that callers can
    tell "no matches" apart from "bad credential".
    """

    def __init__(self, credential: Any, accepted: Iterable[str]) -> None:
        """Initialize with the rejected value and the accepted labels.

        Args:
            credential: The value that was passed in
            accepted: Labels the expander recognizes
        """
        self.credential = credential
        self.accepted = sorted(accepted)
        super().__init__(
            f"Unrecognized credential {credential!r}. "
            f"Accepted credentials: {', '.join(self.accepted)}"
        )


class MalformedDocumentError(MatchingError):
    """Requirement document lacks its occupation reference or item list."""

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        """Initialize with a reason and the document's position in the input.

        Args:
            message: Human-readable reason
            index: Position of the offending document, when known
        """
        self.index = index
        prefix = f"Document {index}: " if index is not None else ""
        super().__init__(f"{prefix}{message}")
