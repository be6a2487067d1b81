"""
Post-Processor Module.

Second pass over a structured document:
    - direct label regexes for fields the catalog patterns missed
    - removal of other fields' labels and values from every kept value
    - a final validation sweep

Each fallback heuristic carries its own fixed confidence.

Author: ML Engineering Team
"""

import re
from typing import Callable, Dict, List, NamedTuple, Optional, Pattern, Sequence

from article_ocr.catalog import (
    FIELD_CATALOG,
    TITLE_NOT_DETECTED,
    clean_description,
    clean_field,
    clean_notes,
)
from article_ocr.recognition.results import ExtractedField
from article_ocr.utils.logger import get_logger

from .validators import FieldValidator

# Initialize module logger
logger = get_logger(__name__)


class FallbackRule(NamedTuple):
    """Direct regex tried for a field still missing after structuring."""
    field_name: str
    regex: Pattern
    confidence: int
    transform: Optional[Callable[[str], str]] = None


_LABEL_STOP = r'=|:|\n|reference|référence|ref|{extra}price|prix|quantity|quantité|notes|note|$'

FALLBACK_RULES: List[FallbackRule] = [
    FallbackRule(
        'title',
        re.compile(
            r'designation\s*:\s*([^=\n]+?)(?=\s*(?:'
            + _LABEL_STOP.format(extra='description|désignation|designation|') + r'))',
            re.IGNORECASE
        ),
        95,
    ),
    FallbackRule(
        'description',
        re.compile(
            r'designation\s*:\s*([^=\n]+?)(?=\s*(?:' + _LABEL_STOP.format(extra='') + r'))',
            re.IGNORECASE
        ),
        100,
        clean_description,
    ),
    FallbackRule(
        'reference',
        # "Référence" with both accented letters lost by OCR
        re.compile(r'Rference\s*:\s*(PROD-\d{4}-\d{3,})', re.IGNORECASE),
        60,
        str.upper,
    ),
    FallbackRule(
        'price',
        re.compile(
            r'(?:prix|price|unitaire|montant|tarif|coût|cout)\s*[:=\-]?\s*(\d+[.,]\d{2})\s*(?:€|EUR|euros?)?',
            re.IGNORECASE
        ),
        85,
        lambda value: re.sub(r'[^\d.]', '', value.replace(',', '.', 1)),
    ),
    FallbackRule(
        'quantity',
        re.compile(
            r'(?:quantity|quantité|qte|qty|stock|disponible|disponibilité)\s*[:=\-]?\s*(\d+)'
            r'(?:\s*(?:unités?|units?|pcs?|pièces?|pieces?))?',
            re.IGNORECASE
        ),
        80,
    ),
    FallbackRule(
        'notes',
        re.compile(r'Notes\s*:\s*([^\n]+)', re.IGNORECASE),
        60,
        clean_notes,
    ),
]


class PostProcessor:
    """
    Fills missing fields from direct label regexes and cleans the rest.

    Attributes:
        catalog: Field catalog used to detect cross-field contamination
        validator: Validator for the final sweep
        rules: Fallback rules, tried in order

    Example:
        >>> processor = PostProcessor()
        >>> data = {}
        >>> processor.process(data, "price: 12.50 EUR")
        >>> data['price'].value, data['price'].confidence
        ('12.50', 85)
    """

    def __init__(
        self,
        catalog: Sequence = FIELD_CATALOG,
        validator: Optional[FieldValidator] = None,
        rules: Optional[List[FallbackRule]] = None
    ) -> None:
        self.catalog = catalog
        self.validator = validator or FieldValidator()
        self.rules = rules if rules is not None else FALLBACK_RULES
        self._field_names = [field_config.name for field_config in catalog]

    def process(self, data: Dict[str, ExtractedField], text: str) -> None:
        """
        Post-process structured data in place.

        Args:
            data: Field name to ExtractedField, modified in place.
            text: Corrected document text.
        """
        logger.debug(f"Post-processing {len(data)} field(s)")

        self.apply_fallbacks(data, text)
        self.clean_values(data)
        self.validator.drop_invalid(data)

        logger.debug(f"Post-processed fields: {sorted(data)}")

    def apply_fallbacks(self, data: Dict[str, ExtractedField], text: str) -> None:
        """Run the fallback rule of every field that is still missing."""
        for rule in self.rules:
            current = data.get(rule.field_name)
            if current is not None and current.value:
                continue

            match = rule.regex.search(text)
            if not match or not match.group(1):
                continue

            raw_value = match.group(1)
            value = rule.transform(raw_value) if rule.transform else raw_value.strip()
            data[rule.field_name] = ExtractedField(value=value, confidence=rule.confidence)
            logger.debug(f"Fallback found {rule.field_name}: {value!r}")

    def clean_values(self, data: Dict[str, ExtractedField]) -> None:
        """Strip every other field's patterns and synonyms from each value."""
        for field_name, extracted in data.items():
            if not extracted.value or extracted.value == TITLE_NOT_DETECTED:
                continue

            exclude_fields = [name for name in self._field_names if name != field_name]
            cleaned = clean_field(str(extracted.value), exclude_fields, self.catalog)
            if cleaned:
                extracted.value = cleaned
