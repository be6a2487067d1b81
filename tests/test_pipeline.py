import pytest

from article_ocr.postprocessor import FieldValidator
from article_ocr.pipeline import LOW_CONFIDENCE_WARNING, SUCCESS_MESSAGE, ArticleOcrService
from article_ocr.utils.exceptions import OCRProcessingError

ARTICLE_SHEET = (
    "Title: Clavier mécanique RGB\n"
    "Désignation: Clavier gaming\n"
    "Référence: PROD-2024-789\n"
    "Prix: 89.99 EUR\n"
    "Quantité: 100 unités\n"
    "Notes: Livraison express"
)


@pytest.fixture
def service_for(fake_pool):
    def build(text="", **kwargs):
        pool = fake_pool(text, **kwargs)
        return ArticleOcrService(pool=pool), pool
    return build


def test_article_sheet_end_to_end(service_for, scan_file):
    service, pool = service_for(ARTICLE_SHEET)

    result = service.process_document(scan_file, debug=True)

    assert result.success is True
    assert result.message == SUCCESS_MESSAGE
    assert result.confidence == 71
    assert pool.calls == [scan_file]

    assert result.get_value('title') == 'Clavier mécanique RGB'
    assert result.get_value('reference') == 'PROD-2024-789'
    assert result.get_value('price') == '89.99'
    assert result.get_value('quantity') == '100'
    assert result.get_value('notes') == 'Livraison express'

    assert [c.original_text for c in result.corrections] == [
        'Quantité', 'Prix', 'Référence', 'Désignation'
    ]
    assert len(result.recognition_details) == 7

    assert "price: 89.99 EUR" in result.debug['corrected_text']
    assert result.debug['ocr_text'] == ARTICLE_SHEET
    assert result.debug['engine_confidence'] == 88.0
    assert result.debug['warnings'] == []


def test_low_confidence_warning(service_for, scan_file):
    service, _ = service_for("Prix: 89.99 EUR")

    result = service.process_document(scan_file, debug=True)

    assert result.success is True
    assert result.confidence == 27
    assert result.debug['warnings'] == [LOW_CONFIDENCE_WARNING]


def test_debug_output_is_opt_in(service_for, scan_file):
    service, _ = service_for(ARTICLE_SHEET)

    payload = service.process_document(scan_file).to_dict()

    assert 'debug' not in payload
    assert 'recognition_details' not in payload
    assert len(payload['corrections']) == 4
    assert payload['data']['reference'] == {'value': 'PROD-2024-789', 'confidence': 90}


def test_no_corrections_is_none(service_for, scan_file):
    service, _ = service_for("PROD-2024-789")

    result = service.process_document(scan_file)

    assert result.corrections is None
    assert 'corrections' not in result.to_dict()


def test_missing_file_is_a_failed_result(service_for, tmp_path):
    service, pool = service_for(ARTICLE_SHEET)

    result = service.process_document(tmp_path / "missing.png")

    assert result.success is False
    assert result.message == "File not found"
    assert result.confidence == 0
    assert result.data == {}
    assert pool.calls == []


def test_unsupported_extension_is_a_failed_result(service_for, tmp_path):
    document = tmp_path / "notes.docx"
    document.write_bytes(b"PK")
    service, _ = service_for(ARTICLE_SHEET)

    result = service.process_document(document)

    assert result.success is False
    assert result.message.startswith("Unsupported file type")


def test_engine_failure_is_a_failed_result(service_for, scan_file):
    service, _ = service_for(error=OCRProcessingError(str(scan_file), "tesseract crashed"))

    result = service.process_document(scan_file)

    assert result.success is False
    assert result.data == {}
    assert result.confidence == 0


def test_process_text_skips_ocr(service_for):
    service, pool = service_for()

    result = service.process_text("Référence: PROD-2024-789")

    assert result.get_value('reference') == 'PROD-2024-789'
    assert pool.calls == []


def test_context_manager_shuts_pool_down(fake_pool):
    pool = fake_pool()

    with ArticleOcrService(pool=pool) as service:
        service.shutdown()

    assert pool.shutdown_calls == 2


def test_title_marker_survives_post_processing(service_for):
    service, _ = service_for()

    result = service.process_text("   ")

    assert result.get_value('title') == 'Titre non détecté'
    assert result.data['title'].confidence == 0
    assert result.confidence == 0


def test_invalid_direct_title_never_reaches_the_result(service_for):
    service, _ = service_for()

    result = service.process_text("title: ab designation: Clavier RGB")

    assert 'title' in result.data
    assert result.get_value('title') != 'ab'
    assert FieldValidator().is_valid('title', result.get_value('title'))
