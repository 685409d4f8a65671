import math
from datetime import UTC, datetime

import pytest

from config import AMD_RATE_EUR, AMD_RATE_USD
from services.pricing import (
    ExchangeRatesError,
    calculate_booking_total,
    convert_to_amd,
    get_effective_amd_rates,
)

RATES = {"USD": 400.0, "EUR": 430.0}


def test_convert_to_amd():
    assert convert_to_amd(10, "usd ", RATES) == 4000
    assert convert_to_amd(10, None, RATES) == 4000
    assert convert_to_amd(10, "EUR", RATES) == 4300
    assert convert_to_amd(10, "AMD", RATES) == 10
    assert convert_to_amd(10, "GBP", RATES) is None
    assert convert_to_amd(math.inf, "USD", RATES) is None


def test_calculate_booking_total_prefers_net_then_gross():
    payload = {
        "rooms": [
            {"price": {"net": 100.5, "gross": 120}},
            {"price": {"net": None, "gross": 80}},
            {"price": {"net": math.nan, "gross": None}},
            {"price": {}},
        ]
    }
    assert calculate_booking_total(payload) == 180.5
    assert calculate_booking_total({"rooms": []}) == 0


@pytest.mark.anyio
async def test_effective_rates_default_to_configuration(mongo_db):
    assert await get_effective_amd_rates(mongo_db) == {
        "USD": AMD_RATE_USD,
        "EUR": AMD_RATE_EUR,
    }


@pytest.mark.anyio
async def test_latest_stored_rates_override_defaults(mongo_db):
    await mongo_db.exchange_rates.insert_many([
        {"USD": 380, "EUR": 410, "updatedAt": datetime(2026, 1, 1, tzinfo=UTC)},
        {"USD": 395.5, "EUR": "bad", "updatedAt": datetime(2026, 2, 1, tzinfo=UTC)},
    ])

    assert await get_effective_amd_rates(mongo_db) == {"USD": 395.5, "EUR": AMD_RATE_EUR}


@pytest.mark.anyio
async def test_invalid_configured_rate_raises(mongo_db, monkeypatch):
    monkeypatch.setattr("services.pricing.AMD_RATE_USD", 0.0)
    with pytest.raises(ExchangeRatesError, match="USD"):
        await get_effective_amd_rates(mongo_db)
