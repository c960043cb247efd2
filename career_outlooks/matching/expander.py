"""Credential label expansion into synonym phrases.

Requirement text in the NOC data rarely uses the exact credential label, so
each label is widened to the phrases that commonly stand in for it.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from .exceptions import InvalidCredentialError

# Phrases are substring-matched against requirement text; keep them exact.
CREDENTIAL_SYNONYMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "degree": (
        "degree",
        "diploma",
        "university program",
        "university or college",
    ),
    "diploma": (
        "diploma",
        "college program",
        "college or other program",
    ),
    "certificate": (
        "certificate",
        "school programs",
        "school program",
        "apprenticeship",
        "red seal",
        "trades program",
        "trades school",
    ),
    "trades": (
        "trades school",
        "trades program",
        "trades certificate",
        "trades diploma",
        "trades degree",
        "trades university",
        "trades college",
        "trade school",
        "trade program",
        "trade certificate",
        "trade diploma",
        "trade degree",
        "red seal",
    ),
})


class CredentialExpander:
    """Maps credential labels to synonym phrases.

    Args:
        synonyms: Label to phrases table. Defaults to CREDENTIAL_SYNONYMS.
        overrides: Extra phrases keyed by label. Phrases for a known label are
            appended after its table entry; unknown labels become new entries.
    """

    def __init__(
        self,
        synonyms: Mapping[str, Sequence[str]] = CREDENTIAL_SYNONYMS,
        overrides: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        table = {label.strip().lower(): tuple(phrases) for label, phrases in synonyms.items()}
        for label, phrases in (overrides or {}).items():
            key = label.strip().lower()
            table[key] = tuple(dict.fromkeys((*table.get(key, ()), *phrases)))
        self._table = MappingProxyType(table)

    @property
    def labels(self) -> Tuple[str, ...]:
        """Recognized credential labels."""
        return tuple(self._table)

    def expand(self, credential: str) -> Tuple[str, ...]:
        """Return the synonym phrases for a credential label.

        Args:
            credential: Credential label, any case, surrounding whitespace ignored

        Returns:
            Tuple of synonym phrases in table order

        Raises:
            InvalidCredentialError: If the label is not recognized
        """
        if not isinstance(credential, str) or not credential.strip():
            raise InvalidCredentialError(credential, self._table.keys())

        key = credential.strip().lower()
        try:
            return self._table[key]
        except KeyError:
            raise InvalidCredentialError(credential, self._table.keys()) from None


_default_expander = CredentialExpander()


def expand_credential(credential: str) -> Tuple[str, ...]:
    """Expand a credential label using the built-in synonym table.

    Example:
        >>> expand_credential(" Diploma ")
        ('diploma', 'college program', 'college or other program')
    """
    return _default_expander.expand(credential)
