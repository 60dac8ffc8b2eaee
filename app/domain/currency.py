# app/domain/currency.py
"""
Langue d'affichage, devise et formatage des prix.

Tous les prix sont stockés en dinars (DZD). La devise d'affichage découle
uniquement de la langue : EN → USD, FR → EUR, AR → DZD, tout le reste → DZD.
La conversion n'a lieu qu'à l'affichage.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from enum import Enum
from typing import Dict, Mapping, Optional, Union
import math
import re


class DisplayLanguage(str, Enum):
    FR = "FR"
    EN = "EN"
    AR = "AR"


class SymbolPosition(str, Enum):
    before = "before"
    after = "after"


class DisplayCurrency(str, Enum):
    USD = "USD"
    DZD = "DZD"
    EUR = "EUR"

    @property
    def symbol(self) -> str:
        return CURRENCY_CONFIG[self]["symbol"]

    @property
    def position(self) -> SymbolPosition:
        return CURRENCY_CONFIG[self]["position"]

    @property
    def fraction_digits(self) -> int:
        return CURRENCY_CONFIG[self]["fraction_digits"]


class PriceType(str, Enum):
    """Unité de prix d'une annonce"""
    daily = "dailyPrice"
    weekly = "weeklyPrice"
    monthly = "monthlyPrice"
    total = "total"


CURRENCY_CONFIG = {
    DisplayCurrency.USD: {"symbol": "$", "position": SymbolPosition.before, "fraction_digits": 2},
    DisplayCurrency.DZD: {"symbol": "DA", "position": SymbolPosition.after, "fraction_digits": 0},
    DisplayCurrency.EUR: {"symbol": "€", "position": SymbolPosition.before, "fraction_digits": 2},
}

# Taux par rapport au dinar (base DZD)
DEFAULT_EXCHANGE_RATES: Dict[DisplayCurrency, float] = {
    DisplayCurrency.DZD: 1.0,
    DisplayCurrency.USD: 0.0074,
    DisplayCurrency.EUR: 0.0069,
}

LANGUAGE_CURRENCY = {
    DisplayLanguage.EN: DisplayCurrency.USD,
    DisplayLanguage.FR: DisplayCurrency.EUR,
    DisplayLanguage.AR: DisplayCurrency.DZD,
}

PRICE_SUFFIXES = {
    "dailyPrice": "/day",
    "daily": "/day",
    "weeklyPrice": "/week",
    "weekly": "/week",
    "monthlyPrice": "/month",
    "monthly": "/month",
}

# Préfixe numérique reconnu, comme un parseur de flottant décimal
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_language(value: Optional[str]) -> Optional[DisplayLanguage]:
    """Convertit un code langue ('fr', 'EN'...) ou retourne None s'il est inconnu."""
    if isinstance(value, DisplayLanguage):
        return value
    if not value:
        return None
    try:
        return DisplayLanguage(str(value).strip().upper())
    except ValueError:
        return None


def resolve_language(
    stored: Optional[str] = None,
    query: Optional[str] = None,
    default: Union[str, DisplayLanguage] = DisplayLanguage.EN,
) -> DisplayLanguage:
    """
    Détermine la langue d'affichage.

    Ordre : choix mémorisé par le client, puis paramètre d'URL, puis défaut.
    Les valeurs inconnues sont ignorées.
    """
    for candidate in (stored, query):
        lang = parse_language(candidate)
        if lang is not None:
            return lang
    return parse_language(default) or DisplayLanguage.EN


def resolve_currency(lang) -> DisplayCurrency:
    """Devise d'affichage d'une langue (fonction totale, DZD par défaut)."""
    parsed = parse_language(lang)
    if parsed is None:
        return DisplayCurrency.DZD
    return LANGUAGE_CURRENCY.get(parsed, DisplayCurrency.DZD)


def parse_amount(amount) -> Optional[Decimal]:
    """
    Lit un montant numérique ou une chaîne numérique.

    Les caractères qui suivent le nombre sont ignorés ("12.5 DA" → 12.5).
    Retourne None si rien n'est lisible.
    """
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, Decimal):
        if amount.is_nan() or amount.is_infinite() or math.isinf(float(amount)):
            return None
        return amount
    if isinstance(amount, (int, float)):
        if isinstance(amount, float) and (math.isnan(amount) or math.isinf(amount)):
            return None
        value = Decimal(amount) if isinstance(amount, int) else Decimal(str(amount))
        return None if math.isinf(float(value)) else value
    if isinstance(amount, str):
        match = _NUMBER_PREFIX.match(amount)
        if not match:
            return None
        try:
            value = Decimal(match.group(1))
        except InvalidOperation:
            return None
        # Au-delà de la plage d'un flottant, le montant est illisible
        return None if math.isinf(float(value)) else value
    return None


def price_suffix(price_type: Optional[str]) -> str:
    if price_type is None:
        return ""
    key = price_type.value if isinstance(price_type, PriceType) else str(price_type)
    return PRICE_SUFFIXES.get(key, "")


class PriceFormatter:
    """
    Formate des montants canoniques (DZD) dans une devise d'affichage.

    Un formateur est construit pour une langue donnée ; quand la langue
    change, on en construit un nouveau.
    """

    def __init__(
        self,
        currency: DisplayCurrency,
        rates: Optional[Mapping[DisplayCurrency, float]] = None,
    ):
        self.currency = currency
        self.rates = dict(DEFAULT_EXCHANGE_RATES)
        if rates:
            self.rates.update(rates)
        self.rates[DisplayCurrency.DZD] = 1.0

    @classmethod
    def for_language(cls, lang, rates: Optional[Mapping[DisplayCurrency, float]] = None) -> "PriceFormatter":
        return cls(resolve_currency(lang), rates)

    @property
    def symbol(self) -> str:
        return self.currency.symbol

    def convert(self, amount_dzd: Decimal) -> Decimal:
        if self.currency == DisplayCurrency.DZD:
            return amount_dzd
        return amount_dzd * Decimal(str(self.rates[self.currency]))

    def format_price(self, amount, price_type: Optional[str] = None) -> str:
        """
        Formate un montant en DZD pour l'affichage.

        Un montant illisible donne toujours "0", quel que soit le type de prix.
        """
        value = parse_amount(amount)
        if value is None:
            return "0"

        digits = self.currency.fraction_digits
        with localcontext() as ctx:
            converted = self.convert(value)
            # Précision suffisante pour garder toutes les décimales des grands montants
            ctx.prec = max(28, converted.adjusted() + digits + 2)
            converted = converted.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
            number = f"{converted:,.{digits}f}"

        if self.currency.position == SymbolPosition.before:
            result = f"{self.currency.symbol}{number}"
        else:
            result = f"{number} {self.currency.symbol}"

        return result + price_suffix(price_type)


def format_price(amount, price_type: Optional[str] = None, lang=DisplayLanguage.EN,
                 rates: Optional[Mapping[DisplayCurrency, float]] = None) -> str:
    """Raccourci : formate un montant pour une langue."""
    return PriceFormatter.for_language(lang, rates).format_price(amount, price_type)
