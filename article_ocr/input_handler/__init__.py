"""
Input Handler Module for the Article OCR Extraction System.

Provides:
    - Document validation and loading as page images
    - Structured extraction of text-bearing PDFs without OCR

Author: ML Engineering Team
"""

from .handler import InputHandler
from .pdf_extractor import (
    ArticleDraft,
    PDFExtractionResult,
    PDFPageResult,
    PDFStructuredExtractor,
)

__all__ = [
    'InputHandler',
    'ArticleDraft',
    'PDFExtractionResult',
    'PDFPageResult',
    'PDFStructuredExtractor',
]
