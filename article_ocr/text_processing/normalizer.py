"""
Text Normalizer.

Canonical single-line form of raw OCR text: line-break variants folded,
whitespace runs collapsed, ends trimmed.
"""

import re

_LINE_BREAKS = re.compile(r'\r\n|\r')
_WHITESPACE = re.compile(r'\s+')


def normalize_text(text: str) -> str:
    """
    Normalize raw OCR text.

    Idempotent: normalize_text(normalize_text(x)) == normalize_text(x).

    Example:
        >>> normalize_text("  Titre: Clavier\\r\\n\\tPrix:  89.99  ")
        'Titre: Clavier Prix: 89.99'
    """
    if not text:
        return ""

    text = _LINE_BREAKS.sub('\n', text)
    return _WHITESPACE.sub(' ', text).strip()


class TextNormalizer:
    """Callable wrapper so the normalizer can be swapped in the pipeline."""

    def normalize(self, text: str) -> str:
        return normalize_text(text)

    __call__ = normalize
