"""
Recognition Result Data Classes.

Per-document data produced by the pipeline. Everything here is created and
discarded within a single document-processing call.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class CorrectionLogEntry:
    """
    One synonym rewrite performed by the synonym corrector.

    Attributes:
        original_text: Synonym as it appeared in the text
        corrected_field: Canonical field name written in its place
        source_field: Field whose synonym list produced the match
        confidence: Trust in the rewrite (0-1)
        context_tags: Free-form tags describing the rewrite
        position: Offset of the synonym in the normalized text
    """
    original_text: str
    corrected_field: str
    source_field: str
    confidence: float = 0.9
    context_tags: List[str] = field(default_factory=lambda: ['semantic-correction'])
    position: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'original': self.original_text,
            'corrected': self.corrected_field,
            'field': self.source_field,
            'confidence': self.confidence,
            'context': list(self.context_tags),
        }


@dataclass
class PatternMatch:
    """Outcome of one catalog pattern against the corrected text."""
    matched: bool
    pattern: str
    priority: int
    matched_text: Optional[str] = None
    confidence_boost: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matched': self.matched,
            'pattern': self.pattern,
            'priority': self.priority,
            'matched_text': self.matched_text,
            'confidence_boost': self.confidence_boost,
        }


@dataclass
class RecognitionResult:
    """
    Recognition confidence for one catalog field.

    Attributes:
        field_name: Canonical field name
        confidence: Recognition confidence, clamped to [0, 1]
        matched_synonyms: Synonyms found as whole words
        pattern_matches: One entry per catalog pattern
    """
    field_name: str
    confidence: float = 0.0
    matched_synonyms: List[str] = field(default_factory=list)
    pattern_matches: List[PatternMatch] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'field_name': self.field_name,
            'confidence': self.confidence,
            'synonyms': list(self.matched_synonyms),
            'patterns': [p.to_dict() for p in self.pattern_matches],
        }


@dataclass
class ExtractedField:
    """
    A structured value with its own confidence.

    Attributes:
        value: Extracted literal value
        confidence: Confidence in the value (0-100)
    """
    value: Union[str, int, float]
    confidence: float = 0.0

    def as_number(self) -> Optional[float]:
        """Numeric reading of the value, None when it is not numeric."""
        if isinstance(self.value, (int, float)):
            return float(self.value)
        try:
            return float(str(self.value).replace(',', '.', 1))
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'confidence': self.confidence}


@dataclass
class DocumentResult:
    """
    Result of one document-processing call.

    Attributes:
        success: Whether the pipeline completed
        data: Field name to extracted value; absent keys were not recoverable
        recognition_details: Per-field recognition results (debug mode only)
        corrections: Synonym rewrites, None when there were none
        confidence: Overall document confidence (0-100)
        processing_time_ms: Wall time of the call in milliseconds
        message: Human-readable outcome
        debug: Intermediate texts and warnings (debug mode only)

    Example:
        >>> result = DocumentResult.failure("File not found", processing_time_ms=3)
        >>> result.success, result.confidence
        (False, 0)
    """
    success: bool
    data: Dict[str, ExtractedField] = field(default_factory=dict)
    recognition_details: Optional[List[RecognitionResult]] = None
    corrections: Optional[List[CorrectionLogEntry]] = None
    confidence: int = 0
    processing_time_ms: int = 0
    message: str = ""
    debug: Optional[Dict[str, Any]] = None

    @classmethod
    def failure(cls, message: str, processing_time_ms: int = 0) -> 'DocumentResult':
        return cls(
            success=False,
            data={},
            confidence=0,
            processing_time_ms=processing_time_ms,
            message=message,
        )

    def get_value(self, field_name: str, default: Any = None) -> Any:
        extracted = self.data.get(field_name)
        return extracted.value if extracted is not None else default

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'success': self.success,
            'data': {name: extracted.to_dict() for name, extracted in self.data.items()},
            'confidence': self.confidence,
            'processing_time_ms': self.processing_time_ms,
            'message': self.message,
        }
        if self.recognition_details is not None:
            result['recognition_details'] = [r.to_dict() for r in self.recognition_details]
        if self.corrections is not None:
            result['corrections'] = [c.to_dict() for c in self.corrections]
        if self.debug is not None:
            result['debug'] = self.debug
        return result

    def __repr__(self) -> str:
        return (
            f"DocumentResult(success={self.success}, "
            f"fields={sorted(self.data)}, "
            f"confidence={self.confidence})"
        )
