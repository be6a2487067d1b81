"""
Field Validators Module.

This module provides the per-field validation rules applied to every
candidate value before it is allowed into a document result:
    - title, description and notes text checks
    - reference format check
    - quantity and price range checks

Author: ML Engineering Team
"""

import re
from typing import Any, Callable, Dict, Tuple

from article_ocr.catalog import TITLE_NOT_DETECTED
from article_ocr.utils.exceptions import ValidationError
from article_ocr.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

REFERENCE_PATTERN = re.compile(r'^PROD-\d{4}-\d{3,}$', re.IGNORECASE)
QUANTITY_PATTERN = re.compile(r'^[0-9]+$')
PRICE_PATTERN = re.compile(r'^\d+[.,]\d{2}$')

# Substrings that betray a title captured together with another label
TITLE_FORBIDDEN = ('=', 'reference', 'description', 'PROD-')


class FieldValidator:
    """
    Validates extracted field values.

    Fields without a rule are accepted as long as they are non-empty.

    Example:
        >>> validator = FieldValidator()
        >>> validator.is_valid('quantity', '100')
        True
        >>> validator.validate('quantity', '0')
        (False, 'Quantity must be between 1 and 1000000')
    """

    MIN_TEXT_LENGTH = 3
    MAX_QUANTITY = 1_000_000
    MAX_PRICE = 1_000_000.0

    def __init__(self) -> None:
        """Initialize the field validator."""
        self._rules: Dict[str, Callable[[str], Tuple[bool, str]]] = {
            'title': self.validate_title,
            'reference': self.validate_reference,
            'description': self.validate_description,
            'quantity': self.validate_quantity,
            'price': self.validate_price,
            'notes': self.validate_notes,
        }
        logger.debug("FieldValidator initialized")

    def is_valid(self, field_name: str, value: Any) -> bool:
        """
        Check if a value is acceptable for a field.

        Args:
            field_name: Canonical field name.
            value: Candidate value.

        Returns:
            True if valid, False otherwise.
        """
        valid, _ = self.validate(field_name, value)
        return valid

    def validate(self, field_name: str, value: Any) -> Tuple[bool, str]:
        """
        Validate a value with detailed feedback.

        Args:
            field_name: Canonical field name.
            value: Candidate value.

        Returns:
            Tuple of (is_valid, message).
        """
        if value is None or value == '':
            return False, "Value is empty"

        rule = self._rules.get(field_name)
        if rule is None:
            return True, "No rule for field"

        return rule(str(value))

    def ensure_valid(self, field_name: str, value: Any) -> Any:
        """
        Return the value unchanged, or raise if it fails validation.

        Raises:
            ValidationError: If the value is rejected.
        """
        valid, message = self.validate(field_name, value)
        if not valid:
            raise ValidationError(field_name, str(value), message)
        return value

    def drop_invalid(self, data: Dict[str, Any]) -> None:
        """
        Remove every extracted field whose value fails validation.

        The title sentinel is kept: it marks a title that was searched for
        and not found.

        Args:
            data: Field name to ExtractedField, modified in place.
        """
        for field_name in list(data):
            value = data[field_name].value
            if field_name == 'title' and value == TITLE_NOT_DETECTED:
                continue
            valid, message = self.validate(field_name, value)
            if not valid:
                logger.debug(f"Dropping {field_name}={value!r}: {message}")
                del data[field_name]

    # -------------------------------------------------------------------------
    # Per-field rules
    # -------------------------------------------------------------------------

    def validate_title(self, value: str) -> Tuple[bool, str]:
        if len(value) < self.MIN_TEXT_LENGTH:
            return False, "Title is too short"
        if value == TITLE_NOT_DETECTED:
            return False, "Title is the not-detected marker"
        if value.startswith('{ title :'):
            return False, "Title is an unparsed label"
        for forbidden in TITLE_FORBIDDEN:
            if forbidden in value:
                return False, f"Title contains '{forbidden}'"
        return True, "Valid title"

    def validate_reference(self, value: str) -> Tuple[bool, str]:
        if not REFERENCE_PATTERN.fullmatch(value):
            return False, "Reference must look like PROD-YYYY-NNN"
        return True, "Valid reference"

    def validate_description(self, value: str) -> Tuple[bool, str]:
        if len(value) < self.MIN_TEXT_LENGTH:
            return False, "Description is too short"
        if value.startswith('PROD-'):
            return False, "Description is a reference"
        return True, "Valid description"

    def validate_quantity(self, value: str) -> Tuple[bool, str]:
        if not QUANTITY_PATTERN.fullmatch(value):
            return False, f"Quantity is not an integer: {value}"
        if not 0 < int(value) <= self.MAX_QUANTITY:
            return False, f"Quantity must be between 1 and {self.MAX_QUANTITY}"
        return True, "Valid quantity"

    def validate_price(self, value: str) -> Tuple[bool, str]:
        if not PRICE_PATTERN.fullmatch(value):
            return False, f"Price must have two decimals: {value}"
        amount = float(value.replace(',', '.', 1))
        if not 0 < amount <= self.MAX_PRICE:
            return False, f"Price {amount} out of range"
        return True, "Valid price"

    def validate_notes(self, value: str) -> Tuple[bool, str]:
        if len(value) < self.MIN_TEXT_LENGTH:
            return False, "Notes are too short"
        return True, "Valid notes"
