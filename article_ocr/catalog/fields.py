"""
Field Catalog.

The fixed, ordered set of business-document fields the pipeline knows how
to recognize. Each field is plain data: synonyms, prioritized regex
patterns with an optional value transform, a required flag and a scoring
weight. The orchestration code never branches on a field subclass; adding
or tuning a field means editing this table.

Catalog order matters: the synonym corrector builds its synonym map in this
order and later fields overwrite earlier ones for shared synonyms, which is
why ``titre``, ``article``, ``produit`` and ``description`` end up rewritten
to ``designation``.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Tuple

from .cleaners import clean_designation, clean_field, clean_notes

# Value stored for the title when nothing usable was found
TITLE_NOT_DETECTED = "Titre non détecté"


@dataclass(frozen=True)
class FieldPattern:
    """
    One extraction rule for a field.

    Attributes:
        regex: Compiled, case-insensitive pattern.
        example: Example of the text the pattern targets, "Label: value"
                 when the pattern is label-driven.
        priority: Higher values are tried first by the data structurer.
        value_group: Capture group holding the value.
        value_transform: Optional callable applied to the captured value.
    """
    regex: Pattern
    example: str
    priority: int
    value_group: int = 1
    value_transform: Optional[Callable[[str], str]] = None

    @property
    def example_label(self) -> Optional[str]:
        """Lowercased label part of the example, None when it has no ':'."""
        if ':' not in self.example:
            return None
        return self.example.split(':')[0].strip().lower()

    def transform(self, value: str) -> str:
        if self.value_transform is not None:
            return self.value_transform(value)
        return value.strip()


@dataclass(frozen=True)
class FieldConfig:
    """
    Recognition and extraction rules for one logical field.

    Attributes:
        name: Unique canonical field name.
        synonyms: Labels rewritten to ``name`` by the synonym corrector.
        patterns: Extraction patterns, in declaration order.
        required: Required fields are structured before optional ones.
        weight: Contribution to the document confidence, None to ignore.
    """
    name: str
    synonyms: Tuple[str, ...]
    patterns: Tuple[FieldPattern, ...]
    required: bool = False
    weight: Optional[float] = None

    def patterns_by_priority(self) -> Tuple[FieldPattern, ...]:
        """Patterns sorted by descending priority, stable for equal priorities."""
        return tuple(sorted(self.patterns, key=lambda p: p.priority, reverse=True))


def _compile(expression: str) -> Pattern:
    return re.compile(expression, re.IGNORECASE)


# -----------------------------------------------------------------------------
# Value transforms
# -----------------------------------------------------------------------------

def _strip_title_label(value: str) -> str:
    value = re.sub(
        r'^(?:title|titre|nom|name|article|produit)\s*[:=\-]?\s*', '', value,
        flags=re.IGNORECASE
    )
    return re.sub(r'\s+', ' ', value).strip()


def _clean_description(value: str) -> str:
    return clean_field(value, ['reference', 'price', 'quantity'], FIELD_CATALOG)


def _clean_designation(value: str) -> str:
    return clean_designation(value, FIELD_CATALOG)


def _upper(value: str) -> str:
    return value.strip().upper()


def _digits_only(value: str) -> str:
    return re.sub(r'\D', '', value)


def _dot_decimal(value: str) -> str:
    return re.sub(r'[^\d.]', '', value.replace(',', '.', 1))


# Labels that end a free-text value
_TITLE_STOP = (
    r'(?=\s*(?:=|:|\n|reference|référence|ref|description|désignation|designation'
    r'|price|prix|quantity|quantité|notes|note|$))'
)
_DESCRIPTION_STOP = r'(?=\s*(?:référence|ref|quantité|qte|prix|price|unitaire|statut)|$)'
_DESIGNATION_STOP = r'(?=\s*(?:quantité|quantite|qte|prix|price|unitaire|statut)|$)'
_UNITS = r'(?:unités?|units?|pcs?|pièces?|pieces?)'


FIELD_CATALOG: Tuple[FieldConfig, ...] = (
    FieldConfig(
        name='title',
        synonyms=('titre', 'nom', 'name', 'article', 'produit'),
        patterns=(
            FieldPattern(
                regex=_compile(
                    r'(?:title|titre|nom|name|article|produit)\s*[:=\-]?\s*([^=\n]+?)' + _TITLE_STOP
                ),
                example="Titre: Clavier gaming mécanique",
                priority=1,
                value_transform=_strip_title_label,
            ),
            FieldPattern(
                regex=_compile(r'^([^=\n:]+?)' + _TITLE_STOP),
                example="Gaming Mouse RGB",
                priority=2,
            ),
        ),
        required=True,
        weight=0.2,
    ),
    FieldConfig(
        name='description',
        synonyms=('description', 'désignation', 'designation', 'produit', 'article', 'détails', 'desc'),
        patterns=(
            FieldPattern(
                regex=_compile(
                    r'(?:description|désignation|designation|produit|article|détails|desc)'
                    r'\s*[:=\-]?\s*([^\n]+?)' + _DESCRIPTION_STOP
                ),
                example="Description: Clavier gaming mécanique RGB",
                priority=1,
                value_transform=_clean_description,
            ),
            FieldPattern(
                regex=_compile(
                    r'^(?!.*(?:reference|référence|ref|quantité|qte|prix|price|unitaire|statut))'
                    r'([^\n]+?)' + _DESCRIPTION_STOP
                ),
                example="Clavier gaming mécanique RGB",
                priority=2,
                value_transform=_clean_description,
            ),
        ),
        required=True,
        weight=0.25,
    ),
    FieldConfig(
        name='reference',
        synonyms=('référence', 'ref', 'code', 'id', 'numéro', 'n°', 'no', 'facture'),
        patterns=(
            FieldPattern(
                regex=_compile(r'(?:reference|référence|ref|facture)\s*[:=\-]?\s*(PROD-\d{4}-\d{3,})'),
                example="Reference: PROD-2624-789",
                priority=1,
                value_transform=_upper,
            ),
            FieldPattern(
                regex=_compile(r'(PROD-\d{4}-\d{3,})'),
                example="PROD-2624-789",
                priority=2,
                value_transform=_upper,
            ),
        ),
    ),
    FieldConfig(
        name='quantity',
        synonyms=('quantité', 'qte', 'qty', 'stock', 'disponible', 'disponibilité'),
        patterns=(
            FieldPattern(
                regex=_compile(
                    r'(?:quantité|qte|qty|stock|disponible|disponibilité)\s*[:=\-]?\s*(\d+)'
                    r'(?:\s*' + _UNITS + r')?'
                ),
                example="Quantité: 100 unités",
                priority=1,
                value_transform=_digits_only,
            ),
            FieldPattern(
                regex=_compile(r'(?:^|\s)(\d+)(?:\s*' + _UNITS + r')(?=\s|$)'),
                example="100 unités",
                priority=2,
                value_transform=_digits_only,
            ),
        ),
        weight=0.15,
    ),
    FieldConfig(
        name='price',
        synonyms=('prix', 'unitaire', 'montant', 'tarif', 'coût', 'cout'),
        patterns=(
            FieldPattern(
                regex=_compile(
                    r'(?:prix|unitaire|montant|tarif|coût|cout)\s*[:=\-]?\s*(\d+[.,]\d{2})\s*(?:€|EUR|euros?)?'
                ),
                example="Prix: 89.99 EUR",
                priority=1,
                value_transform=_dot_decimal,
            ),
            FieldPattern(
                regex=_compile(r'(?:^|\s)(\d+[.,]\d{2})\s*(?:€|EUR|euros?)(?=\s|$)'),
                example="89.99 EUR",
                priority=2,
                value_transform=_dot_decimal,
            ),
        ),
        weight=0.2,
    ),
    FieldConfig(
        name='notes',
        synonyms=('note', 'remarque', 'commentaire'),
        patterns=(
            FieldPattern(
                regex=_compile(r'(?:note|remarque|commentaire)\s*[:=\-]?\s*([^\n]+)'),
                example="Note: Livraison express",
                priority=1,
                value_transform=clean_notes,
            ),
        ),
        weight=0.1,
    ),
    FieldConfig(
        name='designation',
        synonyms=('désignation', 'description', 'titre', 'article', 'produit'),
        patterns=(
            FieldPattern(
                regex=_compile(
                    r'(?:titre|description|designation|désignation)\s*[:=\-]?\s*([^\n]+?)' + _DESIGNATION_STOP
                ),
                example="Description: Clavier gaming mécanique",
                priority=1,
                value_transform=_clean_designation,
            ),
            FieldPattern(
                regex=_compile(
                    r'^(?!.*(?:reference|référence|ref|quantité|quantite|qte|prix|price|unitaire|statut))'
                    r'([^\n]+?)' + _DESIGNATION_STOP
                ),
                example="Clavier gaming mécanique",
                priority=2,
                value_transform=_clean_designation,
            ),
        ),
    ),
)


def get_field(name: str, catalog: Tuple[FieldConfig, ...] = None) -> Optional[FieldConfig]:
    """Look up a field configuration by canonical name."""
    for field_config in catalog or FIELD_CATALOG:
        if field_config.name == name:
            return field_config
    return None


def check_catalog(catalog: Tuple[FieldConfig, ...]) -> None:
    """
    Check catalog invariants.

    Raises:
        ValueError: On duplicate field names or a weight outside [0, 1].
    """
    seen = set()
    for field_config in catalog:
        if field_config.name in seen:
            raise ValueError(f"Duplicate field name in catalog: {field_config.name}")
        seen.add(field_config.name)
        if field_config.weight is not None and not 0 <= field_config.weight <= 1:
            raise ValueError(
                f"Weight for '{field_config.name}' must be in [0, 1], got {field_config.weight}"
            )


check_catalog(FIELD_CATALOG)
