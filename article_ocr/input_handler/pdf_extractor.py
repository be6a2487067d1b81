"""
PDF Structured Extractor.

Alternate entry path for text-bearing PDFs that skips the OCR engine: the
embedded text is read with pdfplumber, split into pages and each page gets
a single-pass label regex parse into an article draft.

Author: ML Engineering Team
"""

import io
import re
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pdfplumber

from config import get_config
from article_ocr.postprocessor.normalizers import AmountNormalizer, parse_number
from article_ocr.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    InputError,
    InvalidPDFError,
    NoExtractableTextError,
)
from article_ocr.utils.helpers import strip_pdf_suffix, truncate_preview, validate_file_exists
from article_ocr.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

PDF_SIGNATURE = b'%PDF'
PAGE_SEPARATOR = '\f'

_UNITS = r'(?:unités?|units?|pcs?|pièces?|pieces?)'

# Page-level label regexes, tried in order per field
TITLE_PATTERNS = [
    re.compile(r'(?:Titre|Title)\s*[:.-]?\s*(.*?)(?=\s*(?:R[ée]f[ée]rence|Description|$))', re.IGNORECASE),
    re.compile(r'^([^:\n]+?)(?=\s*(?:R[ée]f[ée]rence|Description|$))', re.IGNORECASE),
]
REFERENCE_PATTERNS = [
    re.compile(r'R[ée]f[ée]rence\s*[:.-]?\s*(PROD-\d{4}-\d{3,})', re.IGNORECASE),
    re.compile(r'(PROD-\d{4}-\d{3,})', re.IGNORECASE),
]
DESCRIPTION_PATTERNS = [
    re.compile(r'Description\s*[:.-]?\s*(.*?)(?=\s*(?:Prix|Quantit[ée]|Notes|$))', re.IGNORECASE | re.DOTALL),
    re.compile(r'(?:Description|Désignation)\s*[:.-]?\s*(.*?)(?=\s*(?:Prix|Quantit[ée]|Notes|$))', re.IGNORECASE | re.DOTALL),
]
PRICE_PATTERNS = [
    re.compile(r'(?:Prix|Price|Prix unitaire)\s*[:.-]?\s*(\d+[.,]\d{2})\s*(?:€|EUR|euros?)?', re.IGNORECASE),
    re.compile(r'(\d+[.,]\d{2})\s*(?:€|EUR|euros?)', re.IGNORECASE),
]
QUANTITY_PATTERNS = [
    re.compile(r'(?:Quantité|Quantity|Quantité disponible)\s*[:.-]?\s*(\d+)(?:\s*' + _UNITS + r')?', re.IGNORECASE),
    re.compile(r'(\d+)\s*' + _UNITS, re.IGNORECASE),
]
NOTES_PATTERNS = [
    re.compile(r'Notes\s*[:.-]?\s*(.*)$', re.IGNORECASE | re.DOTALL),
]


@dataclass
class ArticleDraft:
    """Article fields read from one PDF page, ready to be reviewed."""
    title: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    quantity_in_stock: Optional[Union[int, float]] = None
    unit_price: Optional[float] = None
    notes: Optional[str] = None
    status: str = 'draft'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PDFPageResult:
    id: int
    name: str
    content_length: int
    preview: str
    extracted_data: ArticleDraft

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'content_length': self.content_length,
            'preview': self.preview,
            'extracted_data': self.extracted_data.to_dict(),
        }


@dataclass
class PDFExtractionResult:
    """
    Per-page structured content of a PDF.

    Attributes:
        file_name: Name of the source file
        pages: One result per non-blank page
        extraction_date: When the extraction ran
        success: Always True; failures raise instead
    """
    file_name: str
    pages: List[PDFPageResult] = field(default_factory=list)
    extraction_date: datetime = field(default_factory=datetime.now)
    success: bool = True

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'file_name': self.file_name,
            'total_pages': self.total_pages,
            'pages': [page.to_dict() for page in self.pages],
            'metadata': {
                'extraction_date': self.extraction_date.isoformat(),
                'source': self.file_name,
            },
        }


def _first_group(patterns: List[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match.group(1).strip()
    return None


def _clean_value(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = re.sub(r'\s+', ' ', value)
    value = re.sub(r'\s*[:.-]\s*$', '', value)
    value = re.sub(r'^\s*[:.-]\s*', '', value)
    return value.strip() or None


class PDFStructuredExtractor:
    """
    Extracts article drafts from the embedded text of a PDF.

    Example:
        >>> extractor = PDFStructuredExtractor()
        >>> result = extractor.extract_file("catalogue.pdf")
        >>> result.total_pages
        3
    """

    def __init__(self, preview_length: Optional[int] = None) -> None:
        self.preview_length = preview_length or get_config("pdf_extractor.preview_length", 100)
        self.amount_normalizer = AmountNormalizer()

    def extract_file(self, filepath: Union[str, Path]) -> PDFExtractionResult:
        """Read a PDF from disk and extract it."""
        path = Path(filepath)
        if not validate_file_exists(path):
            raise DocumentNotFoundError(str(path))
        return self.extract(path.read_bytes(), path.name)

    def extract(self, pdf_bytes: bytes, file_name: str) -> PDFExtractionResult:
        """
        Extract per-page article drafts.

        Args:
            pdf_bytes: Raw PDF content.
            file_name: Name of the source file, used for page names.

        Returns:
            PDFExtractionResult with one entry per non-blank page.

        Raises:
            InvalidPDFError: If the buffer does not start with %PDF.
            NoExtractableTextError: If the PDF has no text.
            CorruptedFileError: On any other extraction failure.
        """
        try:
            self.validate_buffer(pdf_bytes)

            raw_text = self.extract_raw_text(pdf_bytes)
            if not raw_text.strip():
                raise NoExtractableTextError(file_name)

            pages = self.split_pages(raw_text)
            if not pages:
                raise NoExtractableTextError(file_name)

            result = PDFExtractionResult(file_name=file_name)
            base_name = strip_pdf_suffix(file_name)
            for index, content in enumerate(pages, start=1):
                result.pages.append(PDFPageResult(
                    id=index,
                    name=f"{base_name}-Page_{index}",
                    content_length=len(content),
                    preview=truncate_preview(content, self.preview_length),
                    extracted_data=self.parse_page(content),
                ))

            logger.info(f"Extracted {result.total_pages} page(s) from {file_name}")
            return result

        except InputError:
            logger.error(f"PDF extraction failed for {file_name}")
            raise
        except Exception as e:
            logger.error(f"PDF extraction failed for {file_name}: {e}")
            raise CorruptedFileError(file_name, f"Failed to process PDF: {e}") from e

    def validate_buffer(self, pdf_bytes: bytes) -> None:
        if not pdf_bytes or len(pdf_bytes) < 4 or pdf_bytes[:4] != PDF_SIGNATURE:
            raise InvalidPDFError()

    def extract_raw_text(self, pdf_bytes: bytes) -> str:
        """Text of every page, whitespace collapsed, pages separated by form feeds."""
        page_texts = []
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                text = page.extract_text() or ''
                page_texts.append(' '.join(text.split()))
        return PAGE_SEPARATOR.join(page_texts)

    def split_pages(self, raw_text: str) -> List[str]:
        return [page for page in raw_text.split(PAGE_SEPARATOR) if page.strip()]

    def parse_page(self, text: str) -> ArticleDraft:
        """Single-pass label parse of one page."""
        price = _first_group(PRICE_PATTERNS, text)
        quantity = _first_group(QUANTITY_PATTERNS, text)

        return ArticleDraft(
            title=_clean_value(_first_group(TITLE_PATTERNS, text)),
            description=_clean_value(_first_group(DESCRIPTION_PATTERNS, text)),
            reference=_clean_value(_first_group(REFERENCE_PATTERNS, text)),
            quantity_in_stock=parse_number(quantity),
            unit_price=self.amount_normalizer.to_float(price),
            notes=_clean_value(_first_group(NOTES_PATTERNS, text)),
        )
