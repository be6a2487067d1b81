"""
Tesseract OCR Backend.

Recognizes text from page images with Tesseract through pytesseract. The
defaults target French article sheets: the ``fra`` language pack,
automatic page segmentation and preserved inter-word spacing.

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package

Author: ML Engineering Team
"""

import time
from typing import List, Dict, Any, Optional

import pytesseract
from PIL import Image

from config import get_config
from article_ocr.utils.logger import get_logger
from article_ocr.utils.exceptions import OCREngineNotAvailableError, OCRProcessingError
from .ocr_result import OCRResult, OCRWord

logger = get_logger(__name__)


class TesseractBackend:
    """
    Tesseract OCR backend implementation.

    Attributes:
        language: Tesseract language code (e.g., "fra")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        preserve_interword_spaces: Keep runs of spaces between words
        char_whitelist: Restrict recognized characters, empty for no limit

    Example:
        >>> backend = TesseractBackend()
        >>> result = backend.recognize(image)
        >>> print(result.text, result.confidence)
    """

    def __init__(
        self,
        language: Optional[str] = None,
        psm: Optional[int] = None,
        oem: Optional[int] = None
    ) -> None:
        self.language = language or get_config("ocr.tesseract.lang", "fra")
        self.psm = psm if psm is not None else get_config("ocr.tesseract.psm", 3)
        self.oem = oem if oem is not None else get_config("ocr.tesseract.oem", 3)
        self.preserve_interword_spaces = get_config(
            "ocr.tesseract.preserve_interword_spaces", True
        )
        self.char_whitelist = get_config("ocr.tesseract.char_whitelist", "")

        self.version = self._check_tesseract()

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem})"
        )

    def _check_tesseract(self) -> str:
        """
        Check that the Tesseract binary is reachable.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        try:
            version = str(pytesseract.get_tesseract_version())
        except pytesseract.TesseractNotFoundError as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )
        logger.info(f"Tesseract version: {version}")
        return version

    def _build_config(self) -> str:
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.preserve_interword_spaces:
            config_parts.append("-c preserve_interword_spaces=1")

        if self.char_whitelist:
            config_parts.append(f"-c tessedit_char_whitelist={self.char_whitelist}")

        return ' '.join(config_parts)

    def recognize(self, image: Image.Image) -> OCRResult:
        """
        Recognize text on one page image.

        Args:
            image: PIL Image to process.

        Returns:
            OCRResult with the page text and mean word confidence.

        Raises:
            OCRProcessingError: If Tesseract fails on the image.
        """
        start_time = time.time()

        try:
            if image.mode != 'RGB':
                image = image.convert('RGB')

            config = self._build_config()
            logger.debug(f"Running Tesseract OCR (config: {config})")

            data = pytesseract.image_to_data(
                image,
                lang=self.language,
                config=config,
                output_type=pytesseract.Output.DICT
            )
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            logger.error(f"OCR processing failed: {e}")
            raise OCRProcessingError("image", str(e))

        words = self._parse_tesseract_output(data)

        result = OCRResult.from_words(
            words,
            engine="tesseract",
            processing_time=time.time() - start_time,
            metadata={
                'psm': self.psm,
                'oem': self.oem,
                'lang': self.language,
                'tesseract_version': self.version
            }
        )

        logger.debug(
            f"Page recognized: {result.word_count} words, "
            f"confidence {result.confidence:.1f}% ({result.processing_time:.2f}s)"
        )
        return result

    def _parse_tesseract_output(self, data: Dict[str, List]) -> List[OCRWord]:
        """
        Turn image_to_data output into OCRWord objects.

        Empty boxes are skipped; Tesseract's -1 confidences become 0.
        """
        words = []

        for i, text in enumerate(data['text']):
            if not text or not text.strip():
                continue

            conf = float(data['conf'][i])
            if conf < 0:
                conf = 0.0

            words.append(OCRWord(
                text=text.strip(),
                confidence=conf,
                line_key=(data['block_num'][i], data['par_num'][i], data['line_num'][i]),
                word_index=len(words)
            ))

        return words

    def get_info(self) -> Dict[str, Any]:
        return {
            'engine': 'tesseract',
            'version': self.version,
            'lang': self.language,
            'psm': self.psm,
            'oem': self.oem,
        }
