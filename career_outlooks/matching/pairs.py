"""Cartesian pairing of credential synonyms with search terms."""

from typing import Iterable, List, NamedTuple

from career_outlooks.domain.models import Program


class TermPair(NamedTuple):
    """A (credential synonym, search term) pair, both lower-cased."""

    credential: str
    term: str


def generate_pairs(synonyms: Iterable[str], search_terms: Iterable[str]) -> List[TermPair]:
    """Build every (synonym, term) combination.

    Pairs are ordered synonym-major: all pairs for the first synonym, then
    the second, and so on. Either input being empty yields an empty list.

    Args:
        synonyms: Credential synonym phrases
        search_terms: Search keywords (program title, explicit keywords)

    Returns:
        List of TermPair with len(synonyms) * len(search_terms) entries

    Example:
        >>> generate_pairs(["Red Seal"], ["Electrician", "welder"])
        [TermPair(credential='red seal', term='electrician'), TermPair(credential='red seal', term='welder')]
    """
    terms = [term.lower() for term in search_terms]
    return [TermPair(synonym.lower(), term) for synonym in synonyms for term in terms]


def build_search_terms(program: Program) -> List[str]:
    """Search terms for a program: its lower-cased title, then its NOC keywords."""
    return [program.title.lower(), *program.noc_search_keywords]
