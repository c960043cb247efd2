"""Requirement matching engine.

This module implements the matching logic that:
1. Validates requirement documents at the boundary
2. Drops requirement items that ask for years of experience
3. Keeps items containing both halves of at least one term pair
4. Reports matched items alongside the full requirement list

The engine is pure: it does no I/O, keeps no state between calls and does
not log. Callers own logging and error reporting.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from career_outlooks.domain.models import RequirementDocument

from .exceptions import MalformedDocumentError
from .expander import CredentialExpander, expand_credential
from .models import MatchResult
from .pairs import TermPair, generate_pairs

DEFAULT_EXCLUSION_PHRASES: Tuple[str, ...] = ("years of experience",)


class RequirementMatcher:
    """Filters requirement documents by credential/term pairs.

    An item matches when, after lower-casing, it contains no exclusion phrase
    and contains both the credential synonym and the search term of some
    pair. Both halves must appear in the same item. A document is kept when
    at least one of its items matches.

    DEFAULT_EXCLUSION_PHRASES always apply; configured phrases are added
    on top of them.

    Args:
        exclusion_phrases: Extra phrases that disqualify an item regardless of pairs
    """

    def __init__(self, exclusion_phrases: Iterable[str] = ()) -> None:
        phrases = [*DEFAULT_EXCLUSION_PHRASES, *(p.strip().lower() for p in exclusion_phrases if p)]
        self.exclusion_phrases = tuple(dict.fromkeys(p for p in phrases if p))

    def match(
        self,
        documents: Sequence[Any],
        pairs: Sequence[TermPair],
    ) -> List[MatchResult]:
        """Return the documents with at least one matching item.

        Args:
            documents: RequirementDocument instances or mappings of the same shape
            pairs: Term pairs from generate_pairs()

        Returns:
            MatchResult per retained document, in input order. Empty when either
            input is empty.

        Raises:
            MalformedDocumentError: If any document lacks an occupation
                reference or item list
        """
        validated = [self._coerce_document(doc, index) for index, doc in enumerate(documents)]
        if not validated or not pairs:
            return []

        normalized_pairs = [(credential.lower(), term.lower()) for credential, term in pairs]

        results = []
        for document in validated:
            matched = tuple(
                item for item in document.items if self.item_matches(item, normalized_pairs)
            )
            if matched:
                results.append(
                    MatchResult(
                        unit_group=document.unit_group,
                        requirements=document.items,
                        items=matched,
                    )
                )
        return results

    def item_matches(self, item: str, pairs: Iterable[Tuple[str, str]]) -> bool:
        """Check a single requirement item against lower-cased pairs."""
        text = item.lower()

        if self.is_excluded(text):
            return False

        return any(credential in text and term in text for credential, term in pairs)

    def is_excluded(self, text: str) -> bool:
        """True if lower-cased text contains an exclusion phrase."""
        return any(phrase in text for phrase in self.exclusion_phrases)

    @staticmethod
    def _coerce_document(document: Any, index: int) -> RequirementDocument:
        if isinstance(document, RequirementDocument):
            return document

        if not isinstance(document, Mapping):
            raise MalformedDocumentError(
                f"expected a requirement document or mapping, got {type(document).__name__}",
                index=index,
            )

        try:
            return RequirementDocument.model_validate(dict(document))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(loc) for loc in error["loc"]) or "document" for error in e.errors()
            )
            raise MalformedDocumentError(f"invalid or missing fields: {fields}", index=index) from e


def match_credential(
    credential: str,
    search_terms: Iterable[str],
    documents: Sequence[Any],
    exclusion_phrases: Iterable[str] = (),
    expander: Optional[CredentialExpander] = None,
) -> List[MatchResult]:
    """Expand a credential, pair it with search terms and match documents.

    Args:
        credential: Credential label (degree, diploma, certificate, trades)
        search_terms: Search keywords
        documents: Requirement documents to scan
        exclusion_phrases: Extra phrases that disqualify an item
        expander: Optional expander with a custom synonym table

    Returns:
        Matched documents in input order

    Raises:
        InvalidCredentialError: If the credential is not recognized
        MalformedDocumentError: If a document is malformed
    """
    synonyms = expander.expand(credential) if expander else expand_credential(credential)
    pairs = generate_pairs(synonyms, search_terms)
    return RequirementMatcher(exclusion_phrases).match(documents, pairs)
