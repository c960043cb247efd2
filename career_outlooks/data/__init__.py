"""File-backed NOC unit group, program and outlook data."""

from .exceptions import DataLoadError, InvalidProgramIdError, ProgramNotFoundError
from .loader import (
    ProgramCatalog,
    load_outlook_records,
    load_programs,
    load_records,
    load_unit_groups,
)

__all__ = [
    "load_records",
    "load_unit_groups",
    "load_programs",
    "load_outlook_records",
    "ProgramCatalog",
    "DataLoadError",
    "InvalidProgramIdError",
    "ProgramNotFoundError",
]
