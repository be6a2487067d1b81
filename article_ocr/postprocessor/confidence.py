"""
Confidence Aggregator.

Combines per-field recognition confidences into a single 0-100 document
confidence using the catalog weights.
"""

import math
from typing import Dict, Iterable, Optional, Sequence

from article_ocr.catalog import FIELD_CATALOG
from article_ocr.recognition.results import RecognitionResult


class ConfidenceAggregator:
    """
    Weighted average of recognition confidences.

    Only fields with a configured, non-zero weight contribute to either
    side of the average.

    Example:
        >>> aggregator = ConfidenceAggregator()
        >>> aggregator.aggregate([])
        0
    """

    def __init__(self, catalog: Sequence = FIELD_CATALOG) -> None:
        self.weights: Dict[str, Optional[float]] = {
            field_config.name: field_config.weight for field_config in catalog
        }

    def aggregate(self, recognition_results: Iterable[RecognitionResult]) -> int:
        total_weight = 0.0
        weighted_sum = 0.0

        for result in recognition_results:
            weight = self.weights.get(result.field_name)
            if not weight:
                continue
            weighted_sum += result.confidence * 100 * weight
            total_weight += weight

        if total_weight <= 0:
            return 0

        # Halves round up
        score = math.floor(weighted_sum / total_weight + 0.5)
        return max(0, min(100, score))
