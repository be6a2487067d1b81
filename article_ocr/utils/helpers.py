"""
Helper Utilities Module.

Small filesystem and formatting helpers shared by the input handler,
the PDF extractor and the command line entry point.
"""

from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it and its parents if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension, including the dot.

    Example:
        >>> get_file_extension("scan.PNG")
        '.png'
        >>> get_file_extension("noextension")
        ''
    """
    return Path(filepath).suffix.lower()


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """Check if a path exists and is a regular file."""
    path = Path(filepath)
    return path.exists() and path.is_file()


def strip_pdf_suffix(filename: str) -> str:
    """
    Drop the first ``.pdf`` occurrence from a file name.

    Example:
        >>> strip_pdf_suffix("catalogue.pdf")
        'catalogue'
    """
    return filename.replace('.pdf', '', 1)


def truncate_preview(text: str, length: int = 100) -> str:
    """
    Return the first ``length`` characters, marking truncation with '...'.

    Example:
        >>> truncate_preview("abcdef", 3)
        'abc...'
    """
    if len(text) > length:
        return text[:length] + '...'
    return text
