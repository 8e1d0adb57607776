"""Builders for price observations used across tests."""

from datetime import datetime, timezone
from decimal import Decimal

from cryptorec.types import PriceObservation, Symbol


def at(day: int, hour: int = 0, minute: int = 0, month: int = 1, year: int = 2023) -> datetime:
    """Build a UTC timestamp (January 2023 by default)."""
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def obs(symbol: str, when: datetime, price: str) -> PriceObservation:
    """Build an observation from a decimal string price."""
    return PriceObservation(symbol=Symbol(symbol), timestamp=when, price=Decimal(price))
