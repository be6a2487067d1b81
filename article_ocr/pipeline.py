"""
Article OCR Service.

Orchestrates one document-processing call:

    input validation -> OCR worker pool -> normalizer -> synonym corrector
    -> field recognizer -> data structurer -> post-processor
    -> confidence aggregator -> DocumentResult

Every call either completes with a successful DocumentResult or returns a
failed one; no exception escapes ``process_document``. The worker pool is
the only state kept between calls and is released by ``shutdown()``.

Usage:
    from article_ocr.pipeline import ArticleOcrService

    with ArticleOcrService() as service:
        result = service.process_document("scan.png", debug=True)
        print(result.to_dict())

Author: ML Engineering Team
"""

import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import get_config
from article_ocr.input_handler import InputHandler, PDFExtractionResult, PDFStructuredExtractor
from article_ocr.ocr_engine import OCRWorkerPool
from article_ocr.postprocessor import ConfidenceAggregator, PostProcessor
from article_ocr.recognition import DocumentResult, FieldRecognizer
from article_ocr.recognition.structurer import DataStructurer
from article_ocr.text_processing import SynonymCorrector, TextNormalizer
from article_ocr.utils.exceptions import ArticleOcrError
from article_ocr.utils.logger import get_logger

logger = get_logger(__name__)

LOW_CONFIDENCE_WARNING = "Low confidence score"
SUCCESS_MESSAGE = "Document processed successfully"


class ArticleOcrService:
    """
    Extracts article fields from scanned documents.

    Components are created from configuration unless injected, which is
    how tests swap the OCR pool for a fake.

    Attributes:
        pool: Shared OCR worker pool
        low_confidence_threshold: Below it, debug output carries a warning
    """

    def __init__(
        self,
        pool: Optional[OCRWorkerPool] = None,
        input_handler: Optional[InputHandler] = None,
        normalizer: Optional[TextNormalizer] = None,
        corrector: Optional[SynonymCorrector] = None,
        recognizer: Optional[FieldRecognizer] = None,
        structurer: Optional[DataStructurer] = None,
        post_processor: Optional[PostProcessor] = None,
        aggregator: Optional[ConfidenceAggregator] = None,
        pdf_extractor: Optional[PDFStructuredExtractor] = None
    ) -> None:
        self.pool = pool or OCRWorkerPool()
        self.input_handler = input_handler or InputHandler()
        self.normalizer = normalizer or TextNormalizer()
        self.corrector = corrector or SynonymCorrector()
        self.recognizer = recognizer or FieldRecognizer()
        self.post_processor = post_processor or PostProcessor()
        self.structurer = structurer or DataStructurer(post_processor=self.post_processor)
        self.aggregator = aggregator or ConfidenceAggregator()
        self.pdf_extractor = pdf_extractor or PDFStructuredExtractor()

        self.low_confidence_threshold = get_config("pipeline.low_confidence_threshold", 70)

    def __enter__(self) -> 'ArticleOcrService':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.shutdown()

    def process_document(self, filepath: Union[str, Path], debug: bool = False) -> DocumentResult:
        """
        Run the full pipeline on an image or PDF.

        Args:
            filepath: Document path.
            debug: Include recognition details, intermediate texts and
                   warnings in the result.

        Returns:
            DocumentResult; success is False when anything failed.
        """
        start_time = time.monotonic()

        try:
            path = self.input_handler.validate(filepath)
            ocr_result = self.pool.recognize(path)
            logger.debug(
                f"OCR returned {len(ocr_result.text)} chars "
                f"(engine confidence {ocr_result.confidence:.1f})"
            )
            result = self.process_text(
                ocr_result.text,
                engine_confidence=ocr_result.confidence,
                debug=debug,
                start_time=start_time
            )
            logger.info(
                f"Processed {path.name}: {len(result.data)} field(s), "
                f"confidence {result.confidence}"
            )
            return result

        except Exception as e:
            message = e.message if isinstance(e, ArticleOcrError) else str(e)
            logger.error(f"Document processing failed: {e}")
            return DocumentResult.failure(message, self._elapsed_ms(start_time))

    def process_text(
        self,
        text: str,
        engine_confidence: Optional[float] = None,
        debug: bool = False,
        start_time: Optional[float] = None
    ) -> DocumentResult:
        """
        Run every stage after OCR on raw text.

        Args:
            text: Raw OCR text.
            engine_confidence: Confidence reported by the OCR engine.
            debug: Include diagnostic output.
            start_time: time.monotonic() at the start of the call.

        Returns:
            Successful DocumentResult.
        """
        if start_time is None:
            start_time = time.monotonic()

        normalized_text = self.normalizer.normalize(text)
        corrected_text, corrections = self.corrector.correct(normalized_text)
        recognition_results = self.recognizer.recognize(corrected_text)
        data = self.structurer.structure(corrected_text, recognition_results)

        self.post_processor.process(data, corrected_text)
        confidence = self.aggregator.aggregate(recognition_results)

        result = DocumentResult(
            success=True,
            data=data,
            recognition_details=recognition_results if debug else None,
            corrections=corrections or None,
            confidence=confidence,
            processing_time_ms=self._elapsed_ms(start_time),
            message=SUCCESS_MESSAGE,
        )

        if debug:
            result.debug = self._build_debug(
                text, normalized_text, corrected_text, engine_confidence, confidence
            )

        if confidence < self.low_confidence_threshold:
            logger.warning(f"Low document confidence: {confidence}")

        return result

    def extract_pdf_structured(self, filepath: Union[str, Path]) -> PDFExtractionResult:
        """
        Per-page article drafts from a text-bearing PDF, without OCR.

        Raises:
            InputError: If the file is missing, not a PDF, or has no text.
        """
        return self.pdf_extractor.extract_file(filepath)

    def shutdown(self) -> None:
        """Terminate the OCR worker pool. Safe to call more than once."""
        self.pool.shutdown()

    def _build_debug(
        self,
        ocr_text: str,
        normalized_text: str,
        corrected_text: str,
        engine_confidence: Optional[float],
        confidence: int
    ) -> Dict[str, Any]:
        warnings: List[str] = []
        if confidence < self.low_confidence_threshold:
            warnings.append(LOW_CONFIDENCE_WARNING)

        return {
            'ocr_text': ocr_text,
            'normalized_text': normalized_text,
            'corrected_text': corrected_text,
            'engine_confidence': engine_confidence,
            'warnings': warnings,
        }

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.monotonic() - start_time) * 1000)
