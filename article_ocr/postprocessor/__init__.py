"""
Post-Processor Module for the Article OCR Extraction System.

Provides:
    - Per-field validation rules
    - Amount and number normalization
    - Fallback extraction and cross-field cleaning
    - Weighted document confidence

Author: ML Engineering Team
"""

from .validators import FieldValidator
from .normalizers import AmountNormalizer, parse_number
from .processor import FALLBACK_RULES, FallbackRule, PostProcessor
from .confidence import ConfidenceAggregator

__all__ = [
    'FieldValidator',
    'AmountNormalizer',
    'parse_number',
    'FALLBACK_RULES',
    'FallbackRule',
    'PostProcessor',
    'ConfidenceAggregator',
]
