"""Core type definitions for the crypto recommendation engine.

All data models use Pydantic BaseModel for automatic validation, JSON
serialization, and better error messages. Every model here is a derived,
request-scoped value and is therefore frozen.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import NewType
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Type alias for the canonical (uppercase) crypto identifier
Symbol = NewType("Symbol", str)


def normalize_symbol(raw: str) -> Symbol:
    """Canonicalize user-supplied symbol input.

    :param raw: Symbol in any letter case, possibly padded with whitespace.
    :returns: Uppercase symbol used for every lookup and comparison.
    """
    return Symbol(raw.strip().upper())


def _ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class FrozenModel(BaseModel):
    """Base model with frozen (immutable) configuration."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class PriceOrder(str, Enum):
    """Ordering mode used to select a single price point from a range.

    ``MIN_PRICE`` breaks ties by ascending timestamp, ``MAX_PRICE`` by
    descending timestamp.
    """

    OLDEST = "oldest"
    NEWEST = "newest"
    MIN_PRICE = "min_price"
    MAX_PRICE = "max_price"


# ---------------------------------------------------------------------------
# Price Data Types
# ---------------------------------------------------------------------------


class PricePoint(FrozenModel):
    """One historical price observation.

    :param price: Observed price (non-negative).
    :param timestamp: Observation instant (naive values are taken as UTC).
    """

    price: Decimal = Field(ge=0)
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _timestamp_aware(cls, value: datetime) -> datetime:
        return _ensure_aware(value)


class PriceObservation(FrozenModel):
    """A price observation as produced by ingestion, tagged with its symbol.

    :param symbol: Symbol the observation belongs to.
    :param timestamp: Observation instant.
    :param price: Observed price (non-negative).
    """

    symbol: Symbol
    timestamp: datetime
    price: Decimal = Field(ge=0)

    @field_validator("symbol")
    @classmethod
    def _symbol_upper(cls, value: str) -> str:
        return normalize_symbol(value)

    @field_validator("timestamp")
    @classmethod
    def _timestamp_aware(cls, value: datetime) -> datetime:
        return _ensure_aware(value)

    def to_price_point(self) -> PricePoint:
        """Drop the symbol tag."""
        return PricePoint(price=self.price, timestamp=self.timestamp)


class TimeRange(FrozenModel):
    """Closed interval of instants, inclusive on both ends.

    Built by :class:`cryptorec.engine.ranges.DateRangeResolver`; the
    ``start <= end`` rule is enforced on construction as well.

    :param start: First instant of the range (inclusive).
    :param end: Last instant of the range (inclusive).
    """

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _bounds_aware(cls, value: datetime) -> datetime:
        return _ensure_aware(value)

    @model_validator(mode="after")
    def _ordered(self) -> TimeRange:
        if self.start > self.end:
            raise ValueError("TimeRange start must not be after end")
        return self

    def contains(self, instant: datetime) -> bool:
        """Return True if ``instant`` lies within the range."""
        return self.start <= _ensure_aware(instant) <= self.end


# ---------------------------------------------------------------------------
# Result Types
# ---------------------------------------------------------------------------


class CryptoStats(FrozenModel):
    """The four characteristic price points of a symbol within a range.

    :param symbol: Canonical symbol.
    :param oldest: Earliest observation in the range.
    :param newest: Latest observation in the range.
    :param min: Lowest-priced observation (earliest on ties).
    :param max: Highest-priced observation (latest on ties).
    """

    symbol: Symbol
    oldest: PricePoint
    newest: PricePoint
    min: PricePoint
    max: PricePoint


class NormalizedRange(FrozenModel):
    """Relative price swing ``(max - min) / min`` for a symbol.

    :param symbol: Canonical symbol.
    :param value: Normalized range rounded to 8 fractional digits.
    """

    symbol: Symbol
    value: Decimal = Field(ge=0)


class ApiError(FrozenModel):
    """Uniform error payload handed to outer layers.

    :param code: Machine-readable error code.
    :param message: Human-readable description.
    """

    code: str
    message: str


# ---------------------------------------------------------------------------
# Configuration Types
# ---------------------------------------------------------------------------


class EngineConfig(FrozenModel):
    """Configuration for loading price data and answering queries.

    :param data_dir: Directory (or single CSV file) holding price history.
    :param file_pattern: Glob pattern selecting price files inside data_dir.
    :param data_source: Price source type.
    :param timezone: IANA zone name defining calendar-day boundaries.
    :param log_level: Logging level name.
    """

    data_dir: Path
    file_pattern: str = "*_values.csv"
    data_source: str = "csv"
    timezone: str = "UTC"
    log_level: str = "INFO"

    def zone_info(self) -> tzinfo:
        """Return the tzinfo used to map calendar dates to instants."""
        if self.timezone.upper() == "UTC":
            return timezone.utc
        return ZoneInfo(self.timezone)


__all__ = [
    "Symbol",
    "normalize_symbol",
    "FrozenModel",
    "PriceOrder",
    "PricePoint",
    "PriceObservation",
    "TimeRange",
    "CryptoStats",
    "NormalizedRange",
    "ApiError",
    "EngineConfig",
]
