"""
Data Normalizers Module.

Turns extracted price and quantity strings into numbers.

Author: ML Engineering Team
"""

import re
from typing import Optional, Union

from article_ocr.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class AmountNormalizer:
    """
    Normalizes amount strings to dot-decimal format.

    Handles currency markers and a comma used as decimal separator.

    Example:
        >>> normalizer = AmountNormalizer()
        >>> normalizer.normalize("89,99 EUR")
        '89.99'
        >>> normalizer.to_float("89,99 €")
        89.99
    """

    CURRENCY_MARKERS = ['€', 'EUR', 'euros', 'euro']

    def normalize(self, amount_str: str) -> Optional[str]:
        """
        Normalize an amount string.

        Args:
            amount_str: Input amount string (e.g., "89,99 €").

        Returns:
            Normalized amount string (e.g., "89.99") or None.
        """
        if not amount_str:
            return None

        amount_str = ' '.join(str(amount_str).split())

        for marker in self.CURRENCY_MARKERS:
            amount_str = re.sub(rf'{re.escape(marker)}', '', amount_str, flags=re.IGNORECASE)

        # Comma is the decimal separator when it is the only one
        if amount_str.count(',') == 1 and '.' not in amount_str:
            amount_str = amount_str.replace(',', '.')
        amount_str = re.sub(r'[^\d.]', '', amount_str)

        try:
            value = float(amount_str)
        except ValueError:
            logger.debug(f"Could not parse amount: {amount_str!r}")
            return None

        return f"{value:.2f}"

    def to_float(self, amount_str: str) -> Optional[float]:
        """Numeric value of an amount string, None when it cannot be parsed."""
        normalized = self.normalize(amount_str)
        return float(normalized) if normalized is not None else None


def parse_number(value: Union[str, int, float, None]) -> Optional[Union[int, float]]:
    """
    Coerce an extracted value to a number.

    Digit-only strings become ints, decimal strings become floats.

    Example:
        >>> parse_number("100")
        100
        >>> parse_number("89,99")
        89.99
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return value

    text = str(value).strip()
    if re.fullmatch(r'\d+', text):
        return int(text)

    try:
        return float(text.replace(',', '.', 1))
    except ValueError:
        return None
