"""
Text Processing Module.

Normalization and synonym correction applied to raw OCR text before
field recognition.
"""

from .normalizer import TextNormalizer, normalize_text
from .corrector import SynonymCorrector, SynonymMatch

__all__ = ['TextNormalizer', 'normalize_text', 'SynonymCorrector', 'SynonymMatch']
