"""
Custom Exceptions Module.

Exceptions raised across the article OCR pipeline. Callers can catch the
whole family through ``ArticleOcrError`` or react to a single stage.

Exception Hierarchy:
    ArticleOcrError (base)
    ├── InputError                      fatal, never retried
    │   ├── DocumentNotFoundError
    │   ├── UnsupportedFileTypeError
    │   ├── CorruptedFileError
    │   ├── InvalidPDFError
    │   └── NoExtractableTextError
    ├── EngineError                     retried by the worker pool
    │   ├── OCREngineNotAvailableError
    │   └── OCRProcessingError
    └── PostProcessingError
        └── ValidationError             discarded per candidate value
"""


class ArticleOcrError(Exception):
    """
    Base exception for all article OCR errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(ArticleOcrError):
    """Base exception for input handling errors."""
    pass


class DocumentNotFoundError(InputError):
    """Raised when the document to process does not exist."""

    def __init__(self, filepath: str):
        message = "File not found"
        details = {"filepath": filepath}
        super().__init__(message, details)


class UnsupportedFileTypeError(InputError):
    """
    Raised when an unsupported file type is provided.

    Example:
        >>> raise UnsupportedFileTypeError(".doc", [".pdf", ".png"])
    """

    def __init__(self, file_type: str, supported_types: list):
        message = f"Unsupported file type: '{file_type}'"
        details = {"file_type": file_type, "supported_types": supported_types}
        super().__init__(message, details)


class CorruptedFileError(InputError):
    """Raised when a file appears to be corrupted or unreadable."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Corrupted or unreadable file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class InvalidPDFError(InputError):
    """Raised when a buffer does not carry the %PDF signature."""

    def __init__(self, source: str = None):
        message = "Invalid PDF file"
        details = {"source": source} if source else None
        super().__init__(message, details)


class NoExtractableTextError(InputError):
    """Raised when a document yields no text at all."""

    def __init__(self, source: str = None):
        message = "The PDF does not contain extractable text"
        details = {"source": source} if source else None
        super().__init__(message, details)


# =============================================================================
# ENGINE ERRORS
# =============================================================================

class EngineError(ArticleOcrError):
    """Base exception for OCR engine failures."""
    pass


class OCREngineNotAvailableError(EngineError):
    """Raised when the configured OCR engine is not available."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        super().__init__(message, details)


class OCRProcessingError(EngineError):
    """Raised when OCR recognition fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"OCR processing failed for: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


# =============================================================================
# POST-PROCESSING ERRORS
# =============================================================================

class PostProcessingError(ArticleOcrError):
    """Base exception for post-processing errors."""
    pass


class ValidationError(PostProcessingError):
    """Raised when a candidate value fails its field validator."""

    def __init__(self, field: str, value: str, reason: str = None):
        message = f"Validation failed for field '{field}'"
        details = {"field": field, "value": value, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'ArticleOcrError',
    'InputError',
    'DocumentNotFoundError',
    'UnsupportedFileTypeError',
    'CorruptedFileError',
    'InvalidPDFError',
    'NoExtractableTextError',
    'EngineError',
    'OCREngineNotAvailableError',
    'OCRProcessingError',
    'PostProcessingError',
    'ValidationError',
]
