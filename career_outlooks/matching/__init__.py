"""Credential expansion and requirement matching.

This module provides:
- CredentialExpander / expand_credential: credential label to synonym phrases
- generate_pairs: cartesian product of synonyms and search terms
- RequirementMatcher: filters requirement documents by term pairs
- match_credential: the three steps composed end to end
"""

from .engine import DEFAULT_EXCLUSION_PHRASES, RequirementMatcher, match_credential
from .exceptions import InvalidCredentialError, MalformedDocumentError, MatchingError
from .expander import CREDENTIAL_SYNONYMS, CredentialExpander, expand_credential
from .models import MatchResult
from .pairs import TermPair, build_search_terms, generate_pairs

__all__ = [
    "CREDENTIAL_SYNONYMS",
    "CredentialExpander",
    "expand_credential",
    "TermPair",
    "generate_pairs",
    "build_search_terms",
    "RequirementMatcher",
    "MatchResult",
    "match_credential",
    "DEFAULT_EXCLUSION_PHRASES",
    "MatchingError",
    "InvalidCredentialError",
    "MalformedDocumentError",
]
