"""
Field Catalog Module.

Static, read-only description of the fields extracted from article
documents, plus the cleaners used by their value transforms.
"""

from .fields import (
    FIELD_CATALOG,
    TITLE_NOT_DETECTED,
    FieldConfig,
    FieldPattern,
    check_catalog,
    get_field,
)
from .cleaners import clean_description, clean_designation, clean_field, clean_notes

__all__ = [
    'FIELD_CATALOG',
    'TITLE_NOT_DETECTED',
    'FieldConfig',
    'FieldPattern',
    'check_catalog',
    'get_field',
    'clean_description',
    'clean_designation',
    'clean_field',
    'clean_notes',
]
