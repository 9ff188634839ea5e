"""Composite match predicate for extracted listings.

Criteria order (cheapest first, first failure wins):
  1. eligible     — an enabled Easy Apply button was present
  2. title        — title pattern, case-insensitive by default
  3. description  — description pattern, case-insensitive by default
  4. language     — detected description language is accepted
"""

import logging
import re

from jobhunt.core.config import SearchCriteria
from jobhunt.core.schemas import ListingCandidate
from jobhunt.pipeline.language import normalize_language

logger = logging.getLogger(__name__)

REASON_NOT_ELIGIBLE = "not-eligible"
REASON_TITLE = "title"
REASON_DESCRIPTION = "description"
REASON_LANGUAGE = "language"


class TextPattern:
    """A regular expression plus case sensitivity, injected as configuration."""

    def __init__(self, pattern: str, *, ignore_case: bool = True) -> None:
        self.pattern = pattern
        self.ignore_case = ignore_case
        self._regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)

    def matches(self, text: str) -> bool:
        """True if the pattern matches anywhere in ``text``."""
        return self._regex.search(text) is not None

    def __repr__(self) -> str:
        return f"TextPattern({self.pattern!r}, ignore_case={self.ignore_case})"


class MatchEvaluator:
    """Pure predicate over a ListingCandidate. No side effects."""

    def __init__(
        self,
        title: TextPattern,
        description: TextPattern,
        languages: list[str],
        *,
        accept_any_language: bool = False,
    ) -> None:
        self._title = title
        self._description = description
        self._accept_any = accept_any_language
        self._languages = {normalize_language(lang) for lang in languages}

    @classmethod
    def from_criteria(cls, criteria: SearchCriteria) -> "MatchEvaluator":
        return cls(
            TextPattern(criteria.title_pattern),
            TextPattern(criteria.description_pattern),
            criteria.languages,
            accept_any_language=criteria.accepts_any_language,
        )

    def evaluate(self, candidate: ListingCandidate) -> bool:
        return self.reason(candidate) is None

    def reason(self, candidate: ListingCandidate) -> str | None:
        """Return the name of the first failed criterion, or None on a match."""
        if not candidate.eligible_to_apply:
            return REASON_NOT_ELIGIBLE
        if not self._title.matches(candidate.title):
            return REASON_TITLE
        if not self._description.matches(candidate.description):
            return REASON_DESCRIPTION
        if not self._language_accepted(candidate.detected_language):
            return REASON_LANGUAGE
        return None

    def _language_accepted(self, detected: str | None) -> bool:
        if self._accept_any:
            return True
        if detected is None:
            return False
        return normalize_language(detected) in self._languages
