import pytest

from diaristas.shared.currency import extract_amount_from_text, format_brl, parse_brl


@pytest.mark.parametrize(
    "cents, expected",
    [
        (0, "R$ 0,00"),
        (15000, "R$ 150,00"),
        (45000, "R$ 450,00"),
        (123456, "R$ 1.234,56"),
        (100000000, "R$ 1.000.000,00"),
    ],
)
def test_format_brl(cents, expected):
    assert format_brl(cents) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("R$ 1.234,56", 123456),
        ("150,00", 15000),
        ("150", 15000),
        ("150.00", 15000),
        ("1.500", 150000),
    ],
)
def test_parse_brl(text, expected):
    assert parse_brl(text) == expected


def test_parse_brl_rejects_text_without_digits():
    with pytest.raises(ValueError):
        parse_brl("abc")


def test_extract_amount_with_currency_symbol():
    text = "Comprovante de transferência PIX\nR$ 1.250,00\nPara: Maria"
    assert extract_amount_from_text(text) == 125000


def test_extract_amount_written_in_reais():
    assert extract_amount_from_text("Recebi 300,50 reais de Ana") == 30050


def test_extract_amount_from_labels():
    assert extract_amount_from_text("Valor: 89,90") == 8990
    assert extract_amount_from_text("TOTAL: 1.000,00") == 100000


def test_first_matching_pattern_wins():
    assert extract_amount_from_text("Total: 50,00\nR$ 45,00") == 4500


def test_extract_amount_returns_none_without_match():
    assert extract_amount_from_text("Nenhum valor aqui") is None
    assert extract_amount_from_text("") is None
