"""AMD exchange rates and booking totals."""

import logging
import math
from typing import TypedDict

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from config import AMD_RATE_EUR, AMD_RATE_USD

logger = logging.getLogger(__name__)

RATES_COLLECTION = "exchange_rates"


class ExchangeRatesError(Exception):
    """Raised when no valid AMD exchange rates are available."""


class AmdRates(TypedDict):
    """AMD per unit of each supported currency."""

    USD: float
    EUR: float


class RoomPrice(TypedDict, total=False):
    """Vendor price of a booked room."""

    gross: float | None
    net: float | None


class BookingRoom(TypedDict):
    """Room of a booking payload; only the price matters here."""

    price: RoomPrice


class BookingPayload(TypedDict):
    """Booking payload as far as totals are concerned."""

    rooms: list[BookingRoom]


def _is_finite(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _valid_rate(value: object) -> bool:
    return _is_finite(value) and value > 0  # type: ignore[operator]


async def get_effective_amd_rates(db: AsyncIOMotorDatabase) -> AmdRates:
    """Get the AMD rates in effect.

    The most recently updated ``exchange_rates`` document overrides the
    configured defaults rate by rate.

    Args:
        db: Database handle.

    Returns:
        Effective AMD rates.

    Raises:
        ExchangeRatesError: If a resulting rate is not a positive number.
    """
    rates: AmdRates = {"USD": AMD_RATE_USD, "EUR": AMD_RATE_EUR}

    override = await db[RATES_COLLECTION].find_one({}, sort=[("updatedAt", DESCENDING)])
    if override:
        for currency in ("USD", "EUR"):
            value = override.get(currency)
            if _valid_rate(value):
                rates[currency] = float(value)

    invalid = [currency for currency, value in rates.items() if not _valid_rate(value)]
    if invalid:
        msg = f"Invalid AMD exchange rate for {', '.join(invalid)}"
        raise ExchangeRatesError(msg)

    logger.debug("[ExchangeRates] USD=%s EUR=%s", rates["USD"], rates["EUR"])
    return rates


def convert_to_amd(amount: float, currency: str | None, rates: AmdRates) -> float | None:
    """Convert an amount to AMD.

    Args:
        amount: Amount in ``currency``.
        currency: ISO currency code; defaults to USD.
        rates: AMD rates.

    Returns:
        Amount in AMD, or None for non-finite amounts and unsupported currencies.
    """
    if not _is_finite(amount):
        return None
    normalized = (currency or "USD").strip().upper()
    if normalized == "AMD":
        return amount
    if normalized == "USD":
        return amount * rates["USD"]
    if normalized == "EUR":
        return amount * rates["EUR"]
    return None


def calculate_booking_total(payload: BookingPayload) -> float:
    """Sum room prices, using net when finite, else gross, else zero."""
    total = 0.0
    for room in payload["rooms"]:
        price = room.get("price") or {}
        net, gross = price.get("net"), price.get("gross")
        if _is_finite(net):
            total += net  # type: ignore[operator]
        elif _is_finite(gross):
            total += gross  # type: ignore[operator]
    return total
