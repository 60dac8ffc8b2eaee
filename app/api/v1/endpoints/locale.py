"""Routes API de langue et de devise d'affichage"""
from fastapi import APIRouter, Depends, Query
from typing import Optional
from pydantic import BaseModel

from app.api.deps import get_formatter, get_language
from app.domain.currency import DisplayLanguage, PriceFormatter

router = APIRouter()


class LocaleResponse(BaseModel):
    language: DisplayLanguage
    currency: str
    symbol: str
    position: str
    fraction_digits: int
    rate: float


class FormattedPrice(BaseModel):
    amount: str
    price_type: Optional[str] = None
    formatted: str


@router.get("/", response_model=LocaleResponse)
def get_locale(
    lang: DisplayLanguage = Depends(get_language),
    formatter: PriceFormatter = Depends(get_formatter)
):
    currency = formatter.currency
    return LocaleResponse(
        language=lang,
        currency=currency.value,
        symbol=currency.symbol,
        position=currency.position.value,
        fraction_digits=currency.fraction_digits,
        rate=formatter.rates[currency],
    )


@router.get("/format", response_model=FormattedPrice)
def format_amount(
    amount: str = Query(...),
    price_type: Optional[str] = None,
    formatter: PriceFormatter = Depends(get_formatter)
):
    """Formate un montant en DZD dans la devise de la langue courante"""
    return FormattedPrice(
        amount=amount,
        price_type=price_type,
        formatted=formatter.format_price(amount, price_type),
    )
