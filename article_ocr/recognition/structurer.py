"""
Data Structurer.

Turns the corrected text into validated field values:
    1. direct "title: ..." extraction
    2. catalog patterns, required fields first, highest priority first
    3. fallback extraction and cleaning (post-processor)
    4. title guarantee: the title key is always present
"""

import re
from typing import Dict, List, Optional, Sequence

from article_ocr.catalog import FIELD_CATALOG, TITLE_NOT_DETECTED, FieldConfig
from article_ocr.postprocessor import FieldValidator, PostProcessor
from article_ocr.utils.exceptions import ValidationError
from article_ocr.utils.logger import get_logger

from .results import ExtractedField, RecognitionResult

logger = get_logger(__name__)

DIRECT_TITLE_PATTERN = re.compile(
    r'title\s*:\s*([^:]+?)(?=\s*(?:description|Reference|Quantit|price|Notes)|$)',
    re.IGNORECASE
)
DIRECT_TITLE_CONFIDENCE = 90

# Preferred candidate shape for fields that have one
_BEST_VALUE_PATTERNS = {
    'reference': re.compile(r'PROD-\d{4}-\d{3,}', re.IGNORECASE),
    'price': re.compile(r'^\d+[.,]\d{2}$'),
    'quantity': re.compile(r'^\d+$'),
}


def select_best_value(values: List[str], field_name: str) -> str:
    """
    Pick one value among the validated candidates of a field.

    Reference, price and quantity take the first candidate of the expected
    shape (empty string when none has it). Other fields take the longest
    candidate, the earliest one on ties.
    """
    if not values:
        return ''
    if len(values) == 1:
        return values[0]

    shape = _BEST_VALUE_PATTERNS.get(field_name)
    if shape is not None:
        return next((value for value in values if shape.search(value)), '')

    return max(values, key=len)


class DataStructurer:
    """
    Extracts one validated value per field from corrected text.

    Attributes:
        catalog: Field catalog
        validator: Candidate validator
        post_processor: Fallback extraction and cleaning pass
    """

    def __init__(
        self,
        catalog: Sequence[FieldConfig] = FIELD_CATALOG,
        validator: Optional[FieldValidator] = None,
        post_processor: Optional[PostProcessor] = None
    ) -> None:
        self.catalog = catalog
        self.validator = validator or FieldValidator()
        self.post_processor = post_processor or PostProcessor(catalog, self.validator)

    def structure(
        self,
        text: str,
        recognition_results: List[RecognitionResult]
    ) -> Dict[str, ExtractedField]:
        """
        Structure corrected text into field values.

        Args:
            text: Corrected document text.
            recognition_results: Output of the field recognizer.

        Returns:
            Field name to ExtractedField. Always contains 'title'.
        """
        data: Dict[str, ExtractedField] = {}
        lines = [line.strip() for line in text.split('\n') if line.strip()]
        recognized = {result.field_name: result for result in recognition_results}

        title = self.extract_direct_title(text)
        if title is not None:
            data['title'] = title
            logger.debug(f"Title extracted directly: {title.value!r}")

        required = [f for f in self.catalog if f.required]
        optional = [f for f in self.catalog if not f.required]

        for field_config in required + optional:
            if field_config.name in data:
                continue

            result = recognized.get(field_config.name)
            if result is None:
                continue

            values = self.collect_candidates(field_config, lines)
            if not values:
                continue

            best_value = select_best_value(values, field_config.name)
            if best_value:
                data[field_config.name] = ExtractedField(
                    value=best_value,
                    confidence=round(result.confidence * 100, 2)
                )
                logger.debug(
                    f"{field_config.name}: {best_value!r} "
                    f"({len(values)} candidate(s))"
                )

        self.post_processor.process(data, text)
        self.ensure_title(data, text)

        return data

    def collect_candidates(self, field_config: FieldConfig, lines: List[str]) -> List[str]:
        """Every validated candidate, by descending pattern priority then line order."""
        values = []

        for pattern in field_config.patterns_by_priority():
            for line in lines:
                match = pattern.regex.search(line)
                if not match:
                    continue

                raw_value = match.group(pattern.value_group)
                if not raw_value:
                    continue

                try:
                    value = self.validator.ensure_valid(
                        field_config.name, pattern.transform(raw_value)
                    )
                except ValidationError:
                    continue

                values.append(value)

        return values

    def extract_direct_title(self, text: str) -> Optional[ExtractedField]:
        """The "title: ..." value, None when absent or rejected by the title validator."""
        match = DIRECT_TITLE_PATTERN.search(text)
        if not match:
            return None

        value = match.group(1).strip()
        if not self.validator.is_valid('title', value):
            logger.debug(f"Direct title rejected: {value!r}")
            return None
        return ExtractedField(value=value, confidence=DIRECT_TITLE_CONFIDENCE)

    def ensure_title(self, data: Dict[str, ExtractedField], text: str) -> None:
        """Store the direct title, or the not-detected marker, when the title is missing."""
        current = data.get('title')
        if current is not None and current.value != TITLE_NOT_DETECTED:
            return

        title = self.extract_direct_title(text)
        if title is not None:
            data['title'] = title
            logger.debug(f"Title recovered on last attempt: {title.value!r}")
        else:
            data['title'] = ExtractedField(value=TITLE_NOT_DETECTED, confidence=0)
            logger.debug("No title detected")
