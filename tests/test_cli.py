import json
import logging

import pytest

import main
from config import ConfigurationManager, get_config
from article_ocr.utils.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def detach_log_handlers():
    yield
    logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()


def test_config_dot_notation():
    assert get_config("ocr.pool.max_workers") == 3
    assert get_config("ocr.retry.base_delay") == 0.5
    assert get_config("pipeline.missing.key", "fallback") == "fallback"


def test_config_from_environment(monkeypatch, tmp_path):
    settings = tmp_path / "settings.yaml"
    settings.write_text("ocr:\n  pool:\n    max_workers: 7\n", encoding="utf-8")
    monkeypatch.setenv("ARTICLE_OCR_CONFIG", str(settings))
    ConfigurationManager.reset()

    assert get_config("ocr.pool.max_workers") == 7


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigurationManager(str(tmp_path / "nope.yaml"))


def _fake_run(result):
    def run_extraction(input_path, debug=False, pdf_structured=False, config_path=None):
        return result
    return run_extraction


def test_success_prints_json(monkeypatch, capsys):
    monkeypatch.setattr(main, "run_extraction", _fake_run({'success': True, 'confidence': 90}))

    assert main.main(["--input", "scan.png"]) == 0
    assert json.loads(capsys.readouterr().out) == {'success': True, 'confidence': 90}


def test_failed_result_exit_code(monkeypatch):
    monkeypatch.setattr(main, "run_extraction", _fake_run({'success': False, 'confidence': 0}))
    assert main.main(["--input", "scan.png"]) == 1


def test_strict_rejects_low_confidence(monkeypatch):
    monkeypatch.setattr(main, "run_extraction", _fake_run({'success': True, 'confidence': 71}))

    assert main.main(["--input", "scan.png"]) == 0
    assert main.main(["--input", "scan.png", "--strict"]) == main.EXIT_LOW_CONFIDENCE


def test_output_file(monkeypatch, tmp_path):
    monkeypatch.setattr(main, "run_extraction", _fake_run({'success': True, 'confidence': 99}))
    output = tmp_path / "out" / "result.json"

    assert main.main(["--input", "scan.png", "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8")) == {'success': True, 'confidence': 99}


def test_missing_input_through_pipeline(tmp_path):
    output = tmp_path / "result.json"

    assert main.main(["--input", str(tmp_path / "missing.png"), "--output", str(output)]) == 1
    assert json.loads(output.read_text(encoding="utf-8"))["message"] == "File not found"


def test_stdout_holds_only_json_when_logs_are_emitted(tmp_path, capsys):
    assert main.main(["--input", str(tmp_path / "missing.png")]) == 1

    captured = capsys.readouterr()
    assert json.loads(captured.out)["message"] == "File not found"
    assert "Article OCR" in captured.err
