"""
OCR Result Data Classes.

Standardized output of the OCR engine: the raw recognized text and the
scalar confidence reported by the engine. Word-level data is kept only to
rebuild line breaks and to average the confidence.

Classes:
    OCRWord: Individual recognized word
    OCRResult: Complete OCR output for a document

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple


@dataclass
class OCRWord:
    """
    A single word recognized by the engine.

    Attributes:
        text: The recognized text content
        confidence: Engine confidence for the word (0-100)
        line_key: (block, paragraph, line) position reported by the engine
        word_index: Index of the word in the page
    """
    text: str
    confidence: float = 0.0
    line_key: Tuple[int, int, int] = (0, 0, 0)
    word_index: int = 0

    def __repr__(self) -> str:
        return f"OCRWord('{self.text}', conf={self.confidence:.1f})"


@dataclass
class OCRResult:
    """
    Complete OCR output for one document.

    Attributes:
        text: Raw recognized text, one line per recognized text line
        confidence: Engine-reported confidence (0-100)
        words: Recognized words, possibly empty
        engine: Name of the OCR backend
        page_count: Number of pages recognized
        processing_time: Time taken in seconds
        source_file: Path of the recognized document
        metadata: Backend specific details

    Example:
        >>> result = OCRResult.from_words([OCRWord("Prix:", 91.0), OCRWord("89.99", 88.0)])
        >>> result.text
        'Prix: 89.99'
        >>> result.confidence
        89.5
    """
    text: str = ""
    confidence: float = 0.0
    words: List[OCRWord] = field(default_factory=list)
    engine: str = "tesseract"
    page_count: int = 1
    processing_time: float = 0.0
    source_file: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def word_count(self) -> int:
        return len(self.words)

    def is_empty(self) -> bool:
        return not self.text.strip()

    @classmethod
    def from_words(cls, words: List[OCRWord], **kwargs) -> 'OCRResult':
        """
        Build a result from engine words, grouping them into lines.

        Words keep the engine's reading order; a new line starts whenever
        the (block, paragraph, line) key changes.
        """
        lines: List[List[str]] = []
        current_key = None

        for word in words:
            if word.line_key != current_key:
                lines.append([])
                current_key = word.line_key
            lines[-1].append(word.text)

        text = '\n'.join(' '.join(line) for line in lines)
        confidences = [w.confidence for w in words]
        confidence = sum(confidences) / len(confidences) if confidences else 0.0

        return cls(text=text, confidence=confidence, words=list(words), **kwargs)

    @classmethod
    def merge(cls, pages: List['OCRResult'], source_file: Optional[str] = None) -> 'OCRResult':
        """
        Merge per-page results into one document result.

        Page texts are joined with newlines and confidences averaged.
        """
        if not pages:
            return cls(page_count=0, source_file=source_file)

        return cls(
            text='\n'.join(page.text for page in pages),
            confidence=sum(page.confidence for page in pages) / len(pages),
            words=[word for page in pages for word in page.words],
            engine=pages[0].engine,
            page_count=len(pages),
            processing_time=sum(page.processing_time for page in pages),
            source_file=source_file,
            metadata=dict(pages[0].metadata),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'confidence': self.confidence,
            'word_count': self.word_count,
            'engine': self.engine,
            'page_count': self.page_count,
            'processing_time': self.processing_time,
            'source_file': self.source_file,
            'metadata': self.metadata,
        }

    def __repr__(self) -> str:
        return (
            f"OCRResult(words={self.word_count}, "
            f"pages={self.page_count}, "
            f"conf={self.confidence:.1f})"
        )
