"""
OCR Worker Pool.

Keeps a bounded set of OCR engine instances for the lifetime of the
process. Instances are created lazily up to ``max_workers``; once the pool
is full, a pseudo-randomly chosen existing instance is returned. There is
no exclusive lease: the same instance may serve several documents at once.

The capacity check is not synchronized, so concurrent acquisitions can
grow the pool slightly past ``max_workers``.

Usage:
    from article_ocr.ocr_engine import OCRWorkerPool

    pool = OCRWorkerPool()
    result = pool.recognize("scan.png")
    pool.shutdown()
"""

import random
import time
from pathlib import Path
from typing import Callable, List, Optional, Union

from config import get_config
from article_ocr.utils.logger import get_logger
from article_ocr.utils.helpers import validate_file_exists
from article_ocr.utils.exceptions import DocumentNotFoundError, EngineError
from .engine import OCREngine
from .ocr_result import OCRResult

logger = get_logger(__name__)


class OCRWorkerPool:
    """
    Bounded pool of shared OCR engine instances.

    Attributes:
        max_workers: Soft cap on the number of instances
        retries: Recognition attempts before giving up
        base_delay: Backoff unit in seconds; attempt n waits n * base_delay

    Example:
        >>> pool = OCRWorkerPool(max_workers=2)
        >>> engine = pool.acquire_worker()
        >>> pool.size
        1
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        retries: Optional[int] = None,
        base_delay: Optional[float] = None,
        engine_factory: Optional[Callable[[], OCREngine]] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None
    ) -> None:
        self.max_workers = (
            max_workers if max_workers is not None
            else get_config("ocr.pool.max_workers", 3)
        )
        self.retries = retries if retries is not None else get_config("ocr.retry.attempts", 2)
        self.base_delay = (
            base_delay if base_delay is not None
            else get_config("ocr.retry.base_delay", 0.5)
        )

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.retries < 1:
            raise ValueError(f"Retry attempts must be at least 1, got {self.retries}")

        self._engine_factory = engine_factory or OCREngine
        self._sleep = sleep
        self._random = rng or random.Random()
        self._workers: List[OCREngine] = []

        logger.debug(
            f"OCRWorkerPool initialized (max_workers={self.max_workers}, "
            f"retries={self.retries}, base_delay={self.base_delay}s)"
        )

    @property
    def size(self) -> int:
        return len(self._workers)

    def acquire_worker(self) -> OCREngine:
        """
        Get an engine instance, creating one while below capacity.

        Returns:
            A new instance, or a random existing one once the pool is full.
        """
        if len(self._workers) < self.max_workers:
            worker = self._engine_factory()
            self._workers.append(worker)
            logger.info(f"OCR worker created ({len(self._workers)}/{self.max_workers})")
            return worker

        return self._random.choice(self._workers)

    def recognize(self, filepath: Union[str, Path]) -> OCRResult:
        """
        Recognize a document, retrying engine failures with linear backoff.

        Args:
            filepath: Image or PDF path.

        Returns:
            OCRResult with raw text and engine confidence.

        Raises:
            DocumentNotFoundError: Immediately, without touching an engine.
            EngineError: The last engine failure once attempts are exhausted.
        """
        if not validate_file_exists(filepath):
            raise DocumentNotFoundError(str(filepath))

        last_error: Optional[EngineError] = None

        for attempt in range(1, self.retries + 1):
            try:
                worker = self.acquire_worker()
                result = worker.recognize(filepath)
                if attempt > 1:
                    logger.info(f"OCR succeeded on attempt {attempt}")
                return result

            except EngineError as e:
                last_error = e
                logger.warning(f"OCR attempt {attempt}/{self.retries} failed: {e}")

                if attempt < self.retries:
                    delay = attempt * self.base_delay
                    logger.info(f"Retrying in {delay:.1f} seconds...")
                    self._sleep(delay)

        logger.error(f"OCR failed after {self.retries} attempts")
        raise last_error

    def shutdown(self) -> None:
        """
        Terminate every pooled instance and empty the pool.

        Safe to call repeatedly and on an empty pool. In-flight
        recognitions are not cancelled.
        """
        workers, self._workers = self._workers, []

        for worker in workers:
            try:
                worker.terminate()
            except EngineError as e:
                logger.error(f"Failed to terminate OCR worker: {e}")

        if workers:
            logger.info(f"OCR worker pool shut down ({len(workers)} worker(s))")
