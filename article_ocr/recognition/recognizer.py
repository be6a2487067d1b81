"""
Field Recognizer.

Scores how strongly each catalog field is present in the corrected text:
0.4 when one of its synonyms appears as a whole word, 0.6 when any of its
patterns matches, plus 0.3 for every match whose label agrees with the
label of the pattern's example.
"""

import re
from typing import List, Optional, Sequence

from article_ocr.catalog import FIELD_CATALOG, FieldPattern
from article_ocr.utils.logger import get_logger

from .results import PatternMatch, RecognitionResult

logger = get_logger(__name__)

SYNONYM_SCORE = 0.4
PATTERN_SCORE = 0.6
LABEL_BOOST = 0.3


def label_boost(pattern: FieldPattern, matched_text: Optional[str]) -> float:
    """
    Boost for a match whose label is part of the example's label.

    Patterns whose example carries no label never boost.
    """
    example_label = pattern.example_label
    if not example_label or not matched_text or ':' not in matched_text:
        return 0.0

    matched_label = matched_text.split(':')[0].strip().lower()
    if matched_label and matched_label in example_label:
        return LABEL_BOOST
    return 0.0


class FieldRecognizer:
    """Per-field recognition confidence over a corrected text."""

    def __init__(self, catalog: Sequence = FIELD_CATALOG) -> None:
        self.catalog = catalog
        self._synonym_patterns = {
            field_config.name: [
                (synonym, re.compile(rf'\b{re.escape(synonym)}\b', re.IGNORECASE))
                for synonym in field_config.synonyms
            ]
            for field_config in catalog
        }

    def recognize(self, text: str) -> List[RecognitionResult]:
        """
        Score every catalog field against the text.

        Returns:
            One result per field, highest confidence first. Fields with
            equal confidence keep catalog order.
        """
        results = [self.recognize_field(field_config, text) for field_config in self.catalog]
        results.sort(key=lambda r: r.confidence, reverse=True)

        logger.debug(
            "Recognition: "
            + ", ".join(f"{r.field_name}={r.confidence:.2f}" for r in results)
        )
        return results

    def recognize_field(self, field_config, text: str) -> RecognitionResult:
        matched_synonyms = [
            synonym
            for synonym, pattern in self._synonym_patterns[field_config.name]
            if pattern.search(text)
        ]

        pattern_matches = []
        for pattern in field_config.patterns:
            match = pattern.regex.search(text)
            matched_text = match.group(0) if match else None
            pattern_matches.append(PatternMatch(
                matched=match is not None,
                pattern=pattern.example,
                priority=pattern.priority,
                matched_text=matched_text,
                confidence_boost=label_boost(pattern, matched_text),
            ))

        confidence = 0.0
        if matched_synonyms:
            confidence += SYNONYM_SCORE
        if any(p.matched for p in pattern_matches):
            confidence += PATTERN_SCORE
        confidence += sum(p.confidence_boost for p in pattern_matches)

        return RecognitionResult(
            field_name=field_config.name,
            confidence=round(min(1.0, confidence), 4),
            matched_synonyms=matched_synonyms,
            pattern_matches=pattern_matches,
        )
