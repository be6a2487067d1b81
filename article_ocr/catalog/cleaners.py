"""
Field Value Cleaners.

Greedy catalog patterns regularly capture text that belongs to the next
label on the line ("Clavier RGB reference: PROD-2024-789"). These helpers
strip such cross-field contamination from an extracted value.

Each cleaner receives the catalog explicitly so the catalog module can use
them as value transforms without a circular import.
"""

import re
from typing import Iterable, Optional, Sequence

from article_ocr.utils.logger import get_logger

logger = get_logger(__name__)

# Label debris left by OCR around the reference and designation labels.
# "Rference" is "Référence" with the accented letters dropped.
LABEL_DEBRIS_PATTERNS = [
    re.compile(r'=\s*Rference\s*:\s*PROD-\d{4}-\d{3,}', re.IGNORECASE),
    re.compile(r'=\s*designation\s*:', re.IGNORECASE),
    re.compile(r'=\s*Rference\s*:', re.IGNORECASE),
    re.compile(r'PROD-\d{4}-\d{3,}', re.IGNORECASE),
]

# Frequent accent drops in French OCR output, applied in order
ACCENT_REPAIRS = {
    'quipee': 'équipée',
    'prcis': 'précis',
    'entirement': 'entièrement',
    'avance': 'avancée',
    'rtroeclairage': 'rétroéclairage',
    'Congue': 'Conçue',
    'prcision': 'précision',
    'rapidit': 'rapidité',
    'rapiditéé': 'rapidité',
}

NOTES_LABEL_PATTERNS = [
    # "notes:" captured by the "note" synonym leaves a dangling "s:"
    re.compile(r'^s\s*:\s*', re.IGNORECASE),
    re.compile(r'^notes?\s*:\s*', re.IGNORECASE),
    re.compile(r'^remarque\s*:\s*', re.IGNORECASE),
    re.compile(r'^commentaire\s*:\s*', re.IGNORECASE),
]

_TRAILING_SEPARATOR = re.compile(r'[:=\-]\s*$')
_LEADING_EQUALS = re.compile(r'^\s*=\s*')
_REPEATED_SPACES = re.compile(r'\s{2,}')


def _strip_label_debris(value: str) -> str:
    for pattern in LABEL_DEBRIS_PATTERNS:
        value = pattern.sub('', value, count=1)
    value = re.sub(r'designation\s*:', '', value, count=1, flags=re.IGNORECASE)
    value = re.sub(r'^\s*{\s*designation\s*:', '', value, count=1, flags=re.IGNORECASE)
    return value


def _find_field(catalog: Sequence, name: str):
    for field_config in catalog:
        if field_config.name == name:
            return field_config
    return None


def clean_field(value: str, exclude_fields: Iterable[str], catalog: Sequence) -> str:
    """
    Remove other fields' labels and values from an extracted value.

    For every excluded field, the first match of each of its patterns is
    removed, then everything from any of its synonyms to the end of the line.

    Args:
        value: Extracted value to clean.
        exclude_fields: Names of the fields whose content must not appear.
        catalog: Field catalog providing patterns and synonyms.

    Returns:
        Cleaned value, or the original value when cleaning empties it.
    """
    if not value:
        return value

    original_value = value
    value = _strip_label_debris(value)

    for field_name in exclude_fields:
        field_config = _find_field(catalog, field_name)
        if field_config is None:
            continue

        for pattern in field_config.patterns:
            value = pattern.regex.sub('', value, count=1)

        for synonym in field_config.synonyms:
            synonym_pattern = re.compile(
                rf'(?:^|\s){re.escape(synonym)}\s*[:=\-]?\s*[^\n]*',
                re.IGNORECASE
            )
            value = synonym_pattern.sub('', value, count=1)

    value = _TRAILING_SEPARATOR.sub('', value)
    value = _REPEATED_SPACES.sub(' ', value).strip()

    return value or original_value


def clean_notes(value: str) -> str:
    """
    Strip a leading notes label from a notes value.

    Example:
        >>> clean_notes("s: Livraison express")
        'Livraison express'
    """
    if not value:
        return value

    for pattern in NOTES_LABEL_PATTERNS:
        value = pattern.sub('', value, count=1)

    value = _REPEATED_SPACES.sub(' ', value)
    value = _TRAILING_SEPARATOR.sub('', value)
    return value.strip()


def clean_designation(value: str, catalog: Sequence) -> str:
    """
    Clean a designation value by cutting at any other field's label.

    Args:
        value: Extracted designation.
        catalog: Field catalog providing names and synonyms.

    Returns:
        Cleaned designation.
    """
    if not value:
        return value

    for pattern in LABEL_DEBRIS_PATTERNS:
        value = pattern.sub('', value, count=1)

    for field_config in catalog:
        if field_config.name == 'designation':
            continue
        labels = [field_config.name, *field_config.synonyms]
        alternation = '|'.join(re.escape(label) for label in labels)
        label_pattern = re.compile(
            rf'\b(?:{alternation})\b\s*[:=\-]?\s*[^\n]*',
            re.IGNORECASE
        )
        value = label_pattern.sub('', value, count=1)

    value = _TRAILING_SEPARATOR.sub('', value)
    value = _REPEATED_SPACES.sub(' ', value)
    value = _LEADING_EQUALS.sub('', value)
    return value.strip()


def clean_description(value: str) -> Optional[str]:
    """
    Clean a description found by the fallback extractor.

    Strips label debris and repairs common accent drops.

    Example:
        >>> clean_description("Souris de prcision = ")
        'Souris de précision'
    """
    if not value:
        return value

    value = _strip_label_debris(value)

    for mistake, correction in ACCENT_REPAIRS.items():
        value = re.sub(mistake, correction, value, flags=re.IGNORECASE)

    value = _REPEATED_SPACES.sub(' ', value)
    value = _TRAILING_SEPARATOR.sub('', value)
    value = _LEADING_EQUALS.sub('', value)
    value = re.sub(r'^\s*{\s*', '', value)
    value = re.sub(r'\s*}\s*$', '', value)
    return value.strip()
