import pytest

from config import ConfigurationManager
from article_ocr.ocr_engine import OCRResult


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from the bundled settings.yaml."""
    monkeypatch.delenv("ARTICLE_OCR_CONFIG", raising=False)
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


class FakePool:
    """Stands in for OCRWorkerPool; returns canned OCR output."""

    def __init__(self, text="", confidence=88.0, error=None):
        self.text = text
        self.confidence = confidence
        self.error = error
        self.calls = []
        self.shutdown_calls = 0

    def recognize(self, filepath):
        self.calls.append(filepath)
        if self.error is not None:
            raise self.error
        return OCRResult(text=self.text, confidence=self.confidence, source_file=str(filepath))

    def shutdown(self):
        self.shutdown_calls += 1


@pytest.fixture
def scan_file(tmp_path):
    path = tmp_path / "scan.png"
    path.write_bytes(b"not really a png")
    return path


@pytest.fixture
def fake_pool():
    return FakePool
