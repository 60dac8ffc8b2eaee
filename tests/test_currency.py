# tests/test_currency.py
"""
Tests de la résolution langue → devise et du formatage des prix
Exécuter: pytest tests/test_currency.py -v
"""
import pytest

from app.domain.currency import (
    DisplayCurrency, DisplayLanguage, PriceFormatter, PriceType,
    format_price, parse_amount, resolve_currency, resolve_language
)


@pytest.mark.parametrize("lang, expected", [
    (DisplayLanguage.EN, DisplayCurrency.USD),
    (DisplayLanguage.FR, DisplayCurrency.EUR),
    (DisplayLanguage.AR, DisplayCurrency.DZD),
    ("en", DisplayCurrency.USD),
    ("fr", DisplayCurrency.EUR),
    ("ES", DisplayCurrency.DZD),
    ("", DisplayCurrency.DZD),
    (None, DisplayCurrency.DZD),
    (42, DisplayCurrency.DZD),
])
def test_resolve_currency(lang, expected):
    assert resolve_currency(lang) == expected


def test_resolve_language_order():
    """Cookie, puis paramètre d'URL, puis défaut"""
    assert resolve_language(stored="FR", query="AR") == DisplayLanguage.FR
    assert resolve_language(stored=None, query="ar") == DisplayLanguage.AR
    assert resolve_language(stored="xx", query="FR") == DisplayLanguage.FR
    assert resolve_language() == DisplayLanguage.EN
    assert resolve_language(default="AR") == DisplayLanguage.AR


def test_zero_in_dinars():
    assert format_price(0, lang=DisplayLanguage.AR) == "0 DA"


def test_dinars_have_no_decimals_and_thousands_separator():
    assert format_price(1234567.6, lang=DisplayLanguage.AR) == "1,234,568 DA"


def test_unparseable_amount_is_zero_string():
    for lang in DisplayLanguage:
        assert format_price("abc", lang=lang) == "0"
        assert format_price("abc", PriceType.monthly, lang=lang) == "0"
    assert format_price(None) == "0"
    assert format_price(float("nan")) == "0"


def test_usd_conversion_and_monthly_suffix():
    result = format_price(1000, "monthlyPrice", lang=DisplayLanguage.EN)
    assert result == "$7.40/month"
    assert result.endswith("/month")


def test_eur_symbol_before():
    assert format_price(100000, lang=DisplayLanguage.FR) == "€690.00"


def test_numeric_string_is_parsed():
    assert format_price("20000", "dailyPrice", lang=DisplayLanguage.AR) == "20,000 DA/day"
    assert format_price("  1500.5 DA", lang=DisplayLanguage.AR) == "1,501 DA"


def test_suffixes():
    formatter = PriceFormatter(DisplayCurrency.DZD)
    assert formatter.format_price(10, "weekly") == "10 DA/week"
    assert formatter.format_price(10, PriceType.daily) == "10 DA/day"
    assert formatter.format_price(10, PriceType.total) == "10 DA"
    assert formatter.format_price(10, "yearly") == "10 DA"


def test_custom_rates_keep_dinar_as_base():
    formatter = PriceFormatter(DisplayCurrency.USD, {DisplayCurrency.USD: 0.01, DisplayCurrency.DZD: 3})
    assert formatter.rates[DisplayCurrency.DZD] == 1.0
    assert formatter.format_price(250000) == "$2,500.00"


def test_parse_amount():
    assert parse_amount("12abc") == 12
    assert parse_amount("-3.5") == -3.5
    assert parse_amount(".5") == 0.5
    assert parse_amount("1e3") == 1000
    assert parse_amount(True) is None
    assert parse_amount("abc") is None


def test_very_large_amounts_are_formatted():
    assert format_price("1e30", lang=DisplayLanguage.AR) == f"{10 ** 30:,} DA"
    assert format_price(1e300, lang=DisplayLanguage.EN) == f"${74 * 10 ** 296:,}.00"
    assert format_price(10 ** 40, "monthlyPrice", lang=DisplayLanguage.AR) == f"{10 ** 40:,} DA/month"


def test_amount_beyond_float_range_is_zero():
    assert format_price("1e400", lang=DisplayLanguage.EN) == "0"
    assert format_price(10 ** 400, lang=DisplayLanguage.AR) == "0"
