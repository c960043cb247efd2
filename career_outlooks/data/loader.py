"""Loaders for unit group, program and outlook data files.

Files may be JSON or YAML. The root is either a list of records or a mapping
holding the list under a named key (``unit_groups``, ``programs``,
``outlooks``).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union

import yaml
from pydantic import BaseModel, ValidationError

from career_outlooks.domain.models import Program, UnitGroup
from career_outlooks.logging import get_logger

from .exceptions import DataLoadError, InvalidProgramIdError, ProgramNotFoundError

logger = get_logger(__name__, component="data")

ModelT = TypeVar("ModelT", bound=BaseModel)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_records(path: Path, root_key: Optional[str] = None) -> List[Dict[str, Any]]:
    """Read a JSON or YAML data file into a list of raw records.

    Args:
        path: Data file path
        root_key: Key holding the list when the file root is a mapping

    Returns:
        List of record dicts

    Raises:
        DataLoadError: If the file is missing, unparsable or not a list of mappings
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except FileNotFoundError as e:
        raise DataLoadError("file not found", path=path) from e
    except UnicodeDecodeError as e:
        raise DataLoadError(f"not valid UTF-8: {e}", path=path) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DataLoadError(f"failed to parse: {e}", path=path) from e
    except OSError as e:
        raise DataLoadError(f"failed to read: {e}", path=path) from e

    if isinstance(data, dict) and root_key:
        data = data.get(root_key)

    if not isinstance(data, list):
        expected = f"a list (or a mapping with '{root_key}')" if root_key else "a list"
        raise DataLoadError(f"expected {expected} of records", path=path)

    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise DataLoadError(
                f"record {index} is {type(record).__name__}, expected a mapping", path=path
            )

    return data


def _validate_records(
    records: Iterable[Dict[str, Any]], model: Type[ModelT], path: Path
) -> List[ModelT]:
    validated = []
    for index, record in enumerate(records):
        try:
            validated.append(model.model_validate(record))
        except ValidationError as e:
            fields = ", ".join(".".join(str(loc) for loc in err["loc"]) for err in e.errors())
            raise DataLoadError(
                f"{model.__name__} record {index} is invalid ({fields})", path=path
            ) from e
    return validated


def load_unit_groups(path: Path) -> List[UnitGroup]:
    """Load NOC unit groups.

    Raises:
        DataLoadError: If the file or any record is invalid
    """
    unit_groups = _validate_records(load_records(path, "unit_groups"), UnitGroup, Path(path))

    seen = set()
    for group in unit_groups:
        if group.noc in seen:
            logger.warning(
                f"Duplicate unit group NOC {group.noc}",
                extra={"event": "data.unit_groups.duplicate", "noc": group.noc, "path": str(path)},
            )
        seen.add(group.noc)

    logger.debug(
        "Unit groups loaded",
        extra={"event": "data.unit_groups.loaded", "count": len(unit_groups), "path": str(path)},
    )
    return unit_groups


def load_programs(path: Path) -> List[Program]:
    """Load programs.

    Raises:
        DataLoadError: If the file or any record is invalid, or nids repeat
    """
    programs = _validate_records(load_records(path, "programs"), Program, Path(path))

    seen = set()
    for program in programs:
        if program.nid in seen:
            raise DataLoadError(f"duplicate program nid {program.nid}", path=Path(path))
        seen.add(program.nid)

    logger.debug(
        "Programs loaded",
        extra={"event": "data.programs.loaded", "count": len(programs), "path": str(path)},
    )
    return programs


def load_outlook_records(path: Path) -> List[Dict[str, Any]]:
    """Load raw outlook records (``potential`` still on the LMI-EO scale)."""
    records = load_records(path, "outlooks")
    for index, record in enumerate(records):
        if "noc" not in record:
            raise DataLoadError(f"outlook record {index} has no 'noc'", path=Path(path))
    return records


class ProgramCatalog:
    """Programs indexed by nid."""

    def __init__(self, programs: Iterable[Program]) -> None:
        self._programs = {program.nid: program for program in programs}

    def __len__(self) -> int:
        return len(self._programs)

    def __iter__(self):
        return iter(self._programs.values())

    @staticmethod
    def parse_nid(nid: Union[int, str]) -> int:
        """Validate a program id given as an int or a numeric string.

        Raises:
            InvalidProgramIdError: If nid is not a positive integer
        """
        if isinstance(nid, bool):
            raise InvalidProgramIdError(nid)
        if isinstance(nid, str):
            stripped = nid.strip()
            if not (stripped.isascii() and stripped.isdigit()):
                raise InvalidProgramIdError(nid)
            value = int(stripped)
        elif isinstance(nid, int):
            value = nid
        else:
            raise InvalidProgramIdError(nid)

        if value <= 0:
            raise InvalidProgramIdError(nid)
        return value

    def get(self, nid: Union[int, str]) -> Program:
        """Look up a program by id.

        Raises:
            InvalidProgramIdError: If nid is malformed
            ProgramNotFoundError: If no such program exists
        """
        value = self.parse_nid(nid)
        try:
            return self._programs[value]
        except KeyError:
            raise ProgramNotFoundError(value) from None
