"""
Recognition Module.

Per-field recognition scoring and the result models shared by every
pipeline stage. The data structurer lives in
``article_ocr.recognition.structurer``; it builds on the post-processor,
which itself uses the models defined here.
"""

from .results import (
    CorrectionLogEntry,
    DocumentResult,
    ExtractedField,
    PatternMatch,
    RecognitionResult,
)
from .recognizer import FieldRecognizer

__all__ = [
    'CorrectionLogEntry',
    'DocumentResult',
    'ExtractedField',
    'PatternMatch',
    'RecognitionResult',
    'FieldRecognizer',
]
