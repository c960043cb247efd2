"""Exceptions raised while loading unit group and program data."""

from pathlib import Path
from typing import Any, Optional


class DataLoadError(Exception):
    """Base exception for data file problems.

    Raised when a data file is missing, unreadable or has records that fail
    validation.
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        """Initialize with a reason and the file involved.

        Args:
            message: Human-readable reason
            path: Data file being read, when known
        """
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class InvalidProgramIdError(DataLoadError):
    """Program id is not a positive integer."""

    def __init__(self, nid: Any) -> None:
        self.nid = nid
        super().__init__(f"Invalid program id: {nid!r}. Expected a positive integer.")


class ProgramNotFoundError(DataLoadError):
    """No program with the requested id exists."""

    def __init__(self, nid: int) -> None:
        self.nid = nid
        super().__init__(f"Program not found: {nid}")
