import pytest

from article_ocr.catalog import FieldConfig
from article_ocr.text_processing import SynonymCorrector, TextNormalizer, normalize_text


@pytest.mark.parametrize("raw, expected", [
    ("  Titre: Clavier\r\n\tPrix:  89.99  ", "Titre: Clavier Prix: 89.99"),
    ("a\rb\nc\r\nd", "a b c d"),
    ("", ""),
    ("   \n\t ", ""),
])
def test_normalize_text(raw, expected):
    assert normalize_text(raw) == expected


@pytest.mark.parametrize("raw", [
    "Référence:\r\n PROD-2024-789\r\r",
    "  multiple    spaces\tand\ttabs ",
    "\n\nleading and trailing\n\n",
    "déjà normal",
])
def test_normalize_is_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_text_normalizer_is_callable():
    normalizer = TextNormalizer()
    assert normalizer("a \r\n b") == normalizer.normalize("a \r\n b") == "a b"


def test_corrects_price_synonym():
    corrected, corrections = SynonymCorrector().correct("Prix: 89.99 EUR")

    assert corrected == "price: 89.99 EUR"
    assert len(corrections) == 1
    entry = corrections[0]
    assert entry.original_text == "Prix"
    assert entry.corrected_field == "price"
    assert entry.confidence == 0.9
    assert entry.context_tags == ["semantic-correction"]
    assert entry.position == 0


def test_corrects_accented_reference_label():
    corrected, _ = SynonymCorrector().correct("Référence: PROD-2024-789")
    assert corrected == "reference: PROD-2024-789"


def test_shared_synonym_goes_to_last_declaring_field():
    corrector = SynonymCorrector()
    corrected, corrections = corrector.correct("Titre: Clavier")

    assert corrector.synonym_map["titre"] == "designation"
    assert corrected == "designation: Clavier"
    assert corrections[0].corrected_field == "designation"
    assert corrections[0].source_field == "title"


def test_only_whole_words_are_corrected():
    corrected, corrections = SynonymCorrector().correct("Notes: prixfixe")
    assert corrected == "Notes: prixfixe"
    assert corrections == []


def test_rewrites_rightmost_first():
    corrected, corrections = SynonymCorrector().correct("Prix: 10.00 Quantité: 3 Tarif: 12.00")

    assert corrected == "price: 10.00 quantity: 3 price: 12.00"
    positions = [c.position for c in corrections]
    assert positions == sorted(positions, reverse=True)


def test_correction_is_independent_of_synonym_order():
    synonyms = ("prix", "tarif", "montant", "coût")
    forward = SynonymCorrector([FieldConfig(name="price", synonyms=synonyms, patterns=())])
    backward = SynonymCorrector([FieldConfig(name="price", synonyms=synonyms[::-1], patterns=())])
    text = "Coût 5.00 prix 10.00 TARIF 12.00 montant 7.50 prix"

    forward_text, forward_log = forward.correct(text)
    backward_text, backward_log = backward.correct(text)

    assert forward_text == backward_text == "price 5.00 price 10.00 price 12.00 price 7.50 price"
    assert len(forward_log) == len(backward_log) == 5
