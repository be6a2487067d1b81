import pytest

from article_ocr.catalog import TITLE_NOT_DETECTED
from article_ocr.postprocessor import AmountNormalizer, FieldValidator, parse_number
from article_ocr.recognition import ExtractedField
from article_ocr.utils.exceptions import ValidationError


@pytest.fixture
def validator():
    return FieldValidator()


@pytest.mark.parametrize("value", ["0", "-5", "abc", "1000001", "12.5", "", " 12"])
def test_quantity_rejects(validator, value):
    assert not validator.is_valid('quantity', value)


@pytest.mark.parametrize("value", ["1", "1000000", "100"])
def test_quantity_accepts(validator, value):
    assert validator.is_valid('quantity', value)


@pytest.mark.parametrize("value", ["ab", TITLE_NOT_DETECTED, "a = b", "my reference", "PROD-2024-001 mouse",
                                   "{ title : x", "some description"])
def test_title_rejects(validator, value):
    assert not validator.is_valid('title', value)


def test_title_checks_are_case_sensitive(validator):
    assert validator.is_valid('title', "Reference Keyboard")
    assert validator.is_valid('title', "Clavier RGB")


@pytest.mark.parametrize("value, valid", [
    ("89.99", True),
    ("89,99", True),
    ("1000000.00", True),
    ("0.00", False),
    ("1000000.01", False),
    ("89.9", False),
    ("89.99 EUR", False),
])
def test_price(validator, value, valid):
    assert validator.is_valid('price', value) is valid


@pytest.mark.parametrize("value, valid", [
    ("PROD-2024-789", True),
    ("prod-2024-7890", True),
    ("PROD-24-789", False),
    ("PROD-2024-78", False),
    ("REF PROD-2024-789", False),
])
def test_reference(validator, value, valid):
    assert validator.is_valid('reference', value) is valid


def test_description_and_notes(validator):
    assert validator.is_valid('description', "Clavier")
    assert not validator.is_valid('description', "PROD-2024-789")
    assert not validator.is_valid('description', "ab")
    assert validator.is_valid('notes', "RAS")
    assert not validator.is_valid('notes', "ok")


def test_unknown_field_only_needs_a_value(validator):
    assert validator.is_valid('designation', "x")
    assert not validator.is_valid('designation', "")


def test_ensure_valid_raises(validator):
    assert validator.ensure_valid('quantity', "5") == "5"
    with pytest.raises(ValidationError) as exc_info:
        validator.ensure_valid('quantity', "0")
    assert exc_info.value.details['field'] == 'quantity'


def test_drop_invalid_keeps_title_marker(validator):
    data = {
        'title': ExtractedField(TITLE_NOT_DETECTED, 0),
        'quantity': ExtractedField("0", 60),
        'price': ExtractedField("12.00", 60),
    }
    validator.drop_invalid(data)
    assert sorted(data) == ['price', 'title']


def test_amount_normalizer():
    normalizer = AmountNormalizer()
    assert normalizer.normalize("89,99 EUR") == '89.99'
    assert normalizer.to_float("1250.5 €") == 1250.5
    assert normalizer.normalize("n/a") is None


def test_parse_number():
    assert parse_number("100") == 100
    assert parse_number("89,99") == 89.99
    assert parse_number("abc") is None
    assert parse_number(None) is None
