"""
Article OCR Extraction System - Source Package.

Extracts structured article fields (title, reference, description, price,
quantity, notes) from noisy OCR output of scanned documents and from
text-bearing PDFs.

Modules:
    - catalog: field definitions, synonyms and extraction patterns
    - ocr_engine: Tesseract recognition and the shared worker pool
    - text_processing: normalization and synonym correction
    - recognition: field scoring and structuring
    - postprocessor: fallbacks, validation and document confidence
    - input_handler: input checks and the PDF text path
    - pipeline: the document-processing service

Architecture:
    Input -> OCR -> Normalize -> Correct -> Recognize -> Structure
          -> Post-Process -> Confidence
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'catalog',
    'ocr_engine',
    'text_processing',
    'recognition',
    'postprocessor',
    'input_handler',
    'pipeline',
    'utils',
]
