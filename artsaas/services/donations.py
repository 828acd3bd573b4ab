"""
Donation arithmetic: supported currencies, minimum amount and platform fee.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Literal

from ..core.config import settings

Currency = Literal["USD", "EUR", "GBP", "CAD", "AUD"]
DonationType = Literal["one_time", "monthly", "artwork_purchase"]

SUPPORTED_CURRENCIES: dict[str, dict] = {
    "USD": {"code": "usd", "symbol": "$", "minimum": 1},
    "EUR": {"code": "eur", "symbol": "€", "minimum": 1},
    "GBP": {"code": "gbp", "symbol": "£", "minimum": 1},
    "CAD": {"code": "cad", "symbol": "C$", "minimum": 1},
    "AUD": {"code": "aud", "symbol": "A$", "minimum": 1},
}

CENT = Decimal("0.01")


class DonationAmountError(ValueError):
    pass


def _cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def check_amount(amount: float, currency: str) -> None:
    cfg = SUPPORTED_CURRENCIES.get(currency.upper())
    if cfg is None:
        raise DonationAmountError(f"Unsupported currency: {currency}")
    if amount < cfg["minimum"]:
        raise DonationAmountError(f"Minimum donation amount is {cfg['symbol']}{cfg['minimum']}")


def platform_fee(amount: float, rate: float | None = None) -> tuple[float, float]:
    """(fee, net) rounded to cents; fee is amount * rate (5% by default)."""
    rate = settings.PLATFORM_FEE_RATE if rate is None else rate
    gross = _cents(Decimal(str(amount)))
    fee = _cents(gross * Decimal(str(rate)))
    return float(fee), float(gross - fee)


def to_minor_units(amount: float) -> int:
    """Stripe amounts are integers in the smallest currency unit."""
    return int(_cents(Decimal(str(amount))) * 100)
