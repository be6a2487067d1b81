"""
Input Handler Module.

Validates a document path before any engine work and loads it as page
images for OCR. Images are opened with Pillow; PDFs are rendered page by
page with PyMuPDF.

Usage:
    from article_ocr.input_handler import InputHandler

    handler = InputHandler()
    handler.validate("scan.png")
    images = handler.load_images("scan.png")
"""

import io
from pathlib import Path
from typing import List, Optional, Union

import fitz  # PyMuPDF
from PIL import Image, UnidentifiedImageError

from config import get_config
from article_ocr.utils.logger import get_logger
from article_ocr.utils.helpers import get_file_extension, validate_file_exists
from article_ocr.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    UnsupportedFileTypeError,
)

logger = get_logger(__name__)


class InputHandler:
    """
    Entry gate for documents handed to the OCR pipeline.

    Attributes:
        supported_extensions: Accepted lowercase file extensions
        max_file_size_mb: Largest accepted file, in megabytes
        dpi: Rendering resolution for PDF pages
        max_pages: Maximum number of PDF pages rendered

    Example:
        >>> handler = InputHandler()
        >>> handler.detect_file_type("catalogue.PDF")
        'pdf'
    """

    PDF_EXTENSIONS = {'.pdf'}
    IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.tiff', '.tif', '.bmp'}

    def __init__(
        self,
        supported_extensions: Optional[List[str]] = None,
        max_file_size_mb: Optional[float] = None
    ) -> None:
        extensions = supported_extensions or get_config(
            "input.supported_extensions",
            sorted(self.PDF_EXTENSIONS | self.IMAGE_EXTENSIONS)
        )
        self.supported_extensions = {ext.lower() for ext in extensions}
        self.max_file_size_mb = max_file_size_mb or get_config("input.max_file_size_mb", 10)
        self.dpi = get_config("ocr.pdf.dpi", 300)
        self.max_pages = get_config("ocr.pdf.max_pages", 10)

    def detect_file_type(self, filepath: Union[str, Path]) -> str:
        """Return 'pdf' or 'image' from the file extension."""
        if get_file_extension(filepath) in self.PDF_EXTENSIONS:
            return 'pdf'
        return 'image'

    def validate(self, filepath: Union[str, Path]) -> Path:
        """
        Check that a document can be handed to the engine.

        Args:
            filepath: Path of the document.

        Returns:
            The path as a Path object.

        Raises:
            DocumentNotFoundError: If the file does not exist.
            UnsupportedFileTypeError: If the extension is not accepted.
            CorruptedFileError: If the file is empty or too large.
        """
        path = Path(filepath)

        if not validate_file_exists(path):
            raise DocumentNotFoundError(str(path))

        extension = get_file_extension(path)
        if extension not in self.supported_extensions:
            raise UnsupportedFileTypeError(extension, sorted(self.supported_extensions))

        size = path.stat().st_size
        if size == 0:
            raise CorruptedFileError(str(path), "File is empty")
        if size > self.max_file_size_mb * 1024 * 1024:
            raise CorruptedFileError(
                str(path), f"File exceeds {self.max_file_size_mb} MB"
            )

        return path

    def load_images(self, filepath: Union[str, Path]) -> List[Image.Image]:
        """
        Load a document as RGB page images.

        Raises:
            CorruptedFileError: If the file cannot be decoded.
        """
        path = Path(filepath)

        if self.detect_file_type(path) == 'pdf':
            return self._render_pdf(path)

        try:
            with Image.open(path) as image:
                return [image.convert('RGB')]
        except (UnidentifiedImageError, OSError) as e:
            raise CorruptedFileError(str(path), f"Failed to load image: {e}")

    def _render_pdf(self, path: Path) -> List[Image.Image]:
        images = []
        zoom = self.dpi / 72.0

        try:
            with fitz.open(path) as doc:
                page_count = min(len(doc), self.max_pages)
                if len(doc) > self.max_pages:
                    logger.warning(
                        f"PDF has {len(doc)} pages, limiting to {self.max_pages}"
                    )

                for page_num in range(page_count):
                    pix = doc.load_page(page_num).get_pixmap(matrix=fitz.Matrix(zoom, zoom))
                    image = Image.open(io.BytesIO(pix.tobytes("png")))
                    images.append(image.convert('RGB'))
        except (fitz.FileDataError, RuntimeError) as e:
            logger.error(f"PDF rendering failed: {e}")
            raise CorruptedFileError(str(path), str(e))

        logger.debug(f"Rendered {len(images)} PDF page(s) from {path.name}")
        return images
