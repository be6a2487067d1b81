"""
Utility Module for the Article OCR Extraction System.

Provides:
    - Logging configuration
    - Exception hierarchy
    - File and formatting helpers
"""

from .logger import setup_logger, setup_logger_from_config, get_logger
from .helpers import (
    ensure_directory,
    get_file_extension,
    validate_file_exists,
    strip_pdf_suffix,
    truncate_preview,
)

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'validate_file_exists',
    'strip_pdf_suffix',
    'truncate_preview',
]
