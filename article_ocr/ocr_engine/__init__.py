"""
OCR Engine Module for the Article OCR Extraction System.

Provides:
    - Tesseract-backed text recognition with engine confidence
    - Page-by-page recognition of PDF documents
    - A bounded, lazily grown pool of shared engine instances with
      retry and linear backoff

Author: ML Engineering Team
"""

from .engine import OCREngine
from .tesseract_backend import TesseractBackend
from .ocr_result import OCRResult, OCRWord
from .worker_pool import OCRWorkerPool

__all__ = ['OCREngine', 'TesseractBackend', 'OCRResult', 'OCRWord', 'OCRWorkerPool']
