from article_ocr.catalog import FieldConfig
from article_ocr.postprocessor import ConfidenceAggregator, PostProcessor
from article_ocr.recognition import ExtractedField, RecognitionResult


def test_fallbacks_fill_missing_fields():
    data = {}
    PostProcessor().process(
        data,
        "designation: Souris sans fil price: 25.00 quantity: 10 Notes: Livraison rapide"
    )

    assert {name: (f.value, f.confidence) for name, f in data.items()} == {
        'title': ('Souris sans fil', 95),
        'description': ('Souris sans fil', 100),
        'price': ('25.00', 85),
        'quantity': ('10', 80),
        'notes': ('Livraison rapide', 60),
    }


def test_reference_fallback_on_mislabelled_text():
    data = {}
    PostProcessor().process(data, "Rference: prod-2024-123")

    assert data['reference'].value == 'PROD-2024-123'
    assert data['reference'].confidence == 60


def test_existing_values_are_kept():
    data = {'price': ExtractedField('12.00', 60)}
    PostProcessor().process(data, "price: 25.00")

    assert data['price'].value == '12.00'
    assert data['price'].confidence == 60


def test_invalid_values_are_dropped():
    data = {'quantity': ExtractedField('0', 50)}
    PostProcessor().process(data, "")
    assert data == {}


def test_cleaning_never_empties_a_value():
    data = {'reference': ExtractedField('PROD-2024-789', 90)}
    PostProcessor().process(data, "")

    assert data['reference'].value == 'PROD-2024-789'


def test_aggregate_weighted_average():
    catalog = [
        FieldConfig(name='a', synonyms=(), patterns=(), weight=0.2),
        FieldConfig(name='b', synonyms=(), patterns=(), weight=0.8),
        FieldConfig(name='c', synonyms=(), patterns=()),
    ]
    results = [
        RecognitionResult('a', confidence=1.0),
        RecognitionResult('b', confidence=0.5),
        RecognitionResult('c', confidence=1.0),
    ]

    assert ConfidenceAggregator(catalog).aggregate(results) == 60


def test_aggregate_without_weighted_fields_is_zero():
    assert ConfidenceAggregator().aggregate([]) == 0
    assert ConfidenceAggregator().aggregate([RecognitionResult('designation', confidence=1.0)]) == 0


def test_aggregate_rounds_half_up():
    catalog = [FieldConfig(name='a', synonyms=(), patterns=(), weight=1.0)]
    assert ConfidenceAggregator(catalog).aggregate([RecognitionResult('a', confidence=0.625)]) == 63
