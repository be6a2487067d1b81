"""
Synonym Corrector.

Rewrites every catalog synonym found in the normalized text to its
canonical field name ("Prix" -> "price"), so later stages can key on one
label per field.

All matches are collected against the untouched text first and then
spliced in descending offset order. Rewriting the rightmost span first
keeps every remaining offset valid, which makes the result independent of
the order in which synonyms are scanned.
"""

import re
from typing import Dict, List, NamedTuple, Sequence, Tuple

from article_ocr.catalog import FIELD_CATALOG
from article_ocr.recognition.results import CorrectionLogEntry
from article_ocr.utils.logger import get_logger

logger = get_logger(__name__)

CORRECTION_CONFIDENCE = 0.9
CORRECTION_CONTEXT = 'semantic-correction'


class SynonymMatch(NamedTuple):
    start: int
    end: int
    term: str
    canonical: str


class SynonymCorrector:
    """
    Rewrites synonyms to canonical field names.

    Attributes:
        synonym_map: Lowercase synonym to canonical field name. Built in
                     catalog order; a later field wins a shared synonym.

    Example:
        >>> corrector = SynonymCorrector()
        >>> text, log = corrector.correct("Prix: 89.99 EUR")
        >>> text
        'price: 89.99 EUR'
    """

    def __init__(self, catalog: Sequence = FIELD_CATALOG) -> None:
        self.synonym_map: Dict[str, str] = {}
        # First field declaring each synonym
        self._source_fields: Dict[str, str] = {}
        for field_config in catalog:
            for synonym in field_config.synonyms:
                self.synonym_map[synonym.lower()] = field_config.name
                self._source_fields.setdefault(synonym.lower(), field_config.name)

        self._patterns = [
            (re.compile(rf'\b{re.escape(synonym)}\b', re.IGNORECASE), canonical)
            for synonym, canonical in self.synonym_map.items()
        ]

    def find_matches(self, text: str) -> List[SynonymMatch]:
        """All whole-word synonym occurrences, rightmost first."""
        matches = [
            SynonymMatch(match.start(), match.end(), match.group(0), canonical)
            for pattern, canonical in self._patterns
            for match in pattern.finditer(text)
        ]
        matches.sort(key=lambda m: m.start, reverse=True)
        return matches

    def correct(self, text: str) -> Tuple[str, List[CorrectionLogEntry]]:
        """
        Rewrite synonyms in the text.

        Args:
            text: Normalized text.

        Returns:
            Tuple of (corrected text, one log entry per rewrite).
        """
        corrections: List[CorrectionLogEntry] = []
        corrected_text = text
        # Left edge of the last rewritten span
        boundary = len(text) + 1

        for match in self.find_matches(text):
            # Span overlaps one already rewritten
            if match.end > boundary:
                continue

            canonical = match.canonical
            corrected_text = (
                corrected_text[:match.start] + canonical + corrected_text[match.end:]
            )
            boundary = match.start

            corrections.append(CorrectionLogEntry(
                original_text=match.term,
                corrected_field=canonical,
                source_field=self._source_fields.get(match.term.lower(), canonical),
                confidence=CORRECTION_CONFIDENCE,
                context_tags=[CORRECTION_CONTEXT],
                position=match.start,
            ))

        if corrections:
            logger.debug(f"Applied {len(corrections)} synonym correction(s)")

        return corrected_text, corrections
