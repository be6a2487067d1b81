import pytest

from article_ocr.input_handler import PDFStructuredExtractor
from article_ocr.utils.exceptions import (
    CorruptedFileError,
    DocumentNotFoundError,
    InvalidPDFError,
    NoExtractableTextError,
)

PDF_BYTES = b"%PDF-1.4 fake body"

CATALOGUE_TEXT = (
    "Titre: Souris RGB Référence: PROD-2024-789 Description: Souris optique "
    "Prix: 25,50 € Quantité: 10 unités Notes: Stock limité"
    "\f  \f"
    "Second page text"
)


@pytest.fixture
def extractor():
    return PDFStructuredExtractor()


def _with_text(monkeypatch, extractor, text):
    monkeypatch.setattr(extractor, "extract_raw_text", lambda pdf_bytes: text)
    return extractor


def test_rejects_buffer_without_signature(monkeypatch, extractor):
    split_calls = []
    monkeypatch.setattr(extractor, "split_pages", lambda text: split_calls.append(text) or [])

    with pytest.raises(InvalidPDFError):
        extractor.extract(b"GIF89a....", "image.pdf")

    assert split_calls == []


def test_rejects_empty_buffer(extractor):
    with pytest.raises(InvalidPDFError):
        extractor.extract(b"", "empty.pdf")


def test_missing_file(tmp_path, extractor):
    with pytest.raises(DocumentNotFoundError):
        extractor.extract_file(tmp_path / "missing.pdf")


def test_blank_text_has_nothing_to_extract(monkeypatch, extractor):
    _with_text(monkeypatch, extractor, " \f \n ")

    with pytest.raises(NoExtractableTextError):
        extractor.extract(PDF_BYTES, "scan.pdf")


def test_library_failures_become_corrupted_file(monkeypatch, extractor):
    def broken(pdf_bytes):
        raise ValueError("xref table not found")

    monkeypatch.setattr(extractor, "extract_raw_text", broken)

    with pytest.raises(CorruptedFileError) as excinfo:
        extractor.extract(PDF_BYTES, "broken.pdf")

    assert "xref table not found" in str(excinfo.value)


def test_one_draft_per_non_blank_page(monkeypatch, extractor):
    _with_text(monkeypatch, extractor, CATALOGUE_TEXT)

    result = extractor.extract(PDF_BYTES, "catalogue.pdf")

    assert result.success is True
    assert result.total_pages == 2
    assert [page.id for page in result.pages] == [1, 2]
    assert [page.name for page in result.pages] == ["catalogue-Page_1", "catalogue-Page_2"]

    draft = result.pages[0].extracted_data
    assert draft.title == "Souris RGB"
    assert draft.reference == "PROD-2024-789"
    assert draft.description == "Souris optique"
    assert draft.unit_price == 25.5
    assert draft.quantity_in_stock == 10
    assert draft.notes == "Stock limité"
    assert draft.status == "draft"


def test_unlabelled_page_uses_leading_text_as_title(monkeypatch, extractor):
    _with_text(monkeypatch, extractor, CATALOGUE_TEXT)

    second = extractor.extract(PDF_BYTES, "catalogue.pdf").pages[1]

    assert second.content_length == len("Second page text")
    assert second.extracted_data.title == "Second page text"
    assert second.extracted_data.reference is None
    assert second.extracted_data.unit_price is None
    assert second.extracted_data.quantity_in_stock is None


def test_long_pages_get_truncated_preview(monkeypatch, extractor):
    _with_text(monkeypatch, extractor, "x" * 150)

    page = extractor.extract(PDF_BYTES, "long.pdf").pages[0]

    assert page.content_length == 150
    assert page.preview == "x" * 100 + "..."


def test_parse_page_reads_bare_values(extractor):
    draft = extractor.parse_page("Clavier PROD-2024-123 prix 45.00 EUR 3 pièces")

    assert draft.reference == "PROD-2024-123"
    assert draft.unit_price == 45.0
    assert draft.quantity_in_stock == 3


def test_to_dict_layout(monkeypatch, extractor):
    _with_text(monkeypatch, extractor, CATALOGUE_TEXT)

    payload = extractor.extract(PDF_BYTES, "catalogue.pdf").to_dict()

    assert set(payload) == {"success", "file_name", "total_pages", "pages", "metadata"}
    assert payload["metadata"]["source"] == "catalogue.pdf"
    assert "extraction_date" in payload["metadata"]
    assert payload["pages"][0]["extracted_data"]["unit_price"] == 25.5
