import random

import pytest

from config import ConfigurationManager
from article_ocr.ocr_engine import OCRResult, OCRWorkerPool
from article_ocr.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    OCREngineNotAvailableError,
    OCRProcessingError,
)


class FakeEngine:
    def __init__(self, failures=0, error=None):
        self.failures = failures
        self.error = error or OCRProcessingError("scan.png", "engine crashed")
        self.calls = 0
        self.terminate_calls = 0

    def recognize(self, filepath):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return OCRResult(text="Prix: 89.99 EUR", confidence=91.0, source_file=str(filepath))

    def terminate(self):
        self.terminate_calls += 1


def _pool(engines, **kwargs):
    created = []

    def factory():
        engine = engines() if callable(engines) else engines
        created.append(engine)
        return engine

    sleeps = []
    pool = OCRWorkerPool(
        engine_factory=factory,
        sleep=sleeps.append,
        rng=random.Random(0),
        **kwargs
    )
    return pool, created, sleeps


def test_grows_lazily_up_to_capacity():
    pool, created, _ = _pool(FakeEngine, max_workers=2)
    assert pool.size == 0

    acquired = [pool.acquire_worker() for _ in range(6)]

    assert pool.size == 2
    assert len(created) == 2
    assert acquired[:2] == created
    assert all(worker in created for worker in acquired[2:])


def test_defaults_come_from_config():
    pool = OCRWorkerPool(engine_factory=FakeEngine)
    assert pool.max_workers == 3
    assert pool.retries == 2
    assert pool.base_delay == 0.5


def test_shutdown_is_idempotent():
    pool, created, _ = _pool(FakeEngine, max_workers=2)
    pool.acquire_worker()
    pool.acquire_worker()

    pool.shutdown()
    pool.shutdown()

    assert pool.size == 0
    assert [engine.terminate_calls for engine in created] == [1, 1]


def test_shutdown_on_empty_pool():
    pool, _, _ = _pool(FakeEngine)
    pool.shutdown()
    assert pool.size == 0


def test_shutdown_logs_terminate_failures():
    class BrokenEngine(FakeEngine):
        def terminate(self):
            raise OCREngineNotAvailableError("tesseract")

    pool, _, _ = _pool(BrokenEngine)
    pool.acquire_worker()
    pool.shutdown()
    assert pool.size == 0


def test_retries_engine_errors_with_linear_backoff(scan_file):
    engine = FakeEngine(failures=1)
    pool, _, sleeps = _pool(engine, max_workers=1, retries=2, base_delay=0.5)

    result = pool.recognize(scan_file)

    assert result.text == "Prix: 89.99 EUR"
    assert engine.calls == 2
    assert sleeps == [0.5]


def test_raises_last_error_when_attempts_exhausted(scan_file):
    engine = FakeEngine(failures=10)
    pool, _, sleeps = _pool(engine, max_workers=1, retries=3, base_delay=0.5)

    with pytest.raises(OCRProcessingError):
        pool.recognize(scan_file)

    assert engine.calls == 3
    assert sleeps == [0.5, 1.0]


def test_missing_file_fails_without_engine(tmp_path):
    pool, created, sleeps = _pool(FakeEngine)

    with pytest.raises(DocumentNotFoundError):
        pool.recognize(tmp_path / "missing.png")

    assert created == []
    assert sleeps == []


def test_input_errors_are_not_retried(scan_file):
    engine = FakeEngine(failures=5, error=CorruptedFileError("scan.png", "bad image"))
    pool, _, sleeps = _pool(engine, retries=3)

    with pytest.raises(CorruptedFileError):
        pool.recognize(scan_file)

    assert engine.calls == 1
    assert sleeps == []


@pytest.mark.parametrize("kwargs", [{'retries': 0}, {'max_workers': 0}])
def test_explicit_zero_is_rejected(kwargs):
    with pytest.raises(ValueError):
        OCRWorkerPool(engine_factory=FakeEngine, **kwargs)


def test_zero_attempts_in_config_is_rejected(monkeypatch, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("ocr:\n  retry:\n    attempts: 0\n", encoding="utf-8")
    monkeypatch.setenv("ARTICLE_OCR_CONFIG", str(settings))
    ConfigurationManager.reset()

    with pytest.raises(ValueError):
        OCRWorkerPool(engine_factory=FakeEngine)
