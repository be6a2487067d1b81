"""
Main OCR Engine Module.

``OCREngine`` is one pooled OCR instance: it turns a document path into
raw text plus the engine-reported confidence. Multi-page PDFs are
recognized page by page and merged.

Usage:
    from article_ocr.ocr_engine import OCREngine

    engine = OCREngine()
    result = engine.recognize("scan.png")
    print(result.text, result.confidence)

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Union, Optional, Dict, Any

from config import get_config
from article_ocr.input_handler.handler import InputHandler
from article_ocr.utils.logger import get_logger
from article_ocr.utils.exceptions import OCREngineNotAvailableError
from .ocr_result import OCRResult
from .tesseract_backend import TesseractBackend

logger = get_logger(__name__)


class OCREngine:
    """
    A single OCR engine instance.

    The Tesseract backend runs each recognition in its own subprocess, so
    one instance can serve overlapping recognize() calls.

    Attributes:
        backend_name: Name of the active OCR backend
        backend: The active OCR backend instance
        terminated: True once terminate() was called

    Example:
        >>> engine = OCREngine()
        >>> result = engine.recognize("article.jpg")
        >>> print(f"{result.confidence:.1f}% over {result.page_count} page(s)")
    """

    SUPPORTED_BACKENDS = ['tesseract']

    def __init__(
        self,
        backend: Optional[str] = None,
        input_handler: Optional[InputHandler] = None
    ) -> None:
        self.backend_name = backend or get_config("ocr.engine", "tesseract")

        if self.backend_name == "pytesseract":
            self.backend_name = "tesseract"

        if self.backend_name not in self.SUPPORTED_BACKENDS:
            raise OCREngineNotAvailableError(self.backend_name)

        self.backend = TesseractBackend()
        self.input_handler = input_handler or InputHandler()
        self.terminated = False

        logger.info(f"OCR Engine initialized with backend: {self.backend_name}")

    def recognize(self, filepath: Union[str, Path]) -> OCRResult:
        """
        Recognize the text of a document.

        Args:
            filepath: Image or PDF path.

        Returns:
            OCRResult with the raw text and engine confidence (0-100).

        Raises:
            OCREngineNotAvailableError: If the engine was terminated.
            CorruptedFileError: If the document cannot be decoded.
            OCRProcessingError: If recognition fails.
        """
        if self.terminated:
            raise OCREngineNotAvailableError(f"{self.backend_name} (terminated)")

        images = self.input_handler.load_images(filepath)
        logger.debug(f"Recognizing {len(images)} page(s) from {Path(filepath).name}")

        pages = [self.backend.recognize(image) for image in images]
        return OCRResult.merge(pages, source_file=str(filepath))

    def terminate(self) -> None:
        """Release the instance; later recognize() calls fail."""
        self.terminated = True
        logger.debug(f"OCR engine ({self.backend_name}) terminated")

    def get_backend_info(self) -> Dict[str, Any]:
        info = self.backend.get_info()
        info['terminated'] = self.terminated
        return info
