"""Price store port and its in-memory implementation.

The engine reads price history exclusively through :class:`PriceStore`, so
any storage technology can sit behind it. :class:`InMemoryPriceStore` keeps
each symbol's observations sorted by timestamp and answers range queries with
binary search.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_left, bisect_right
from datetime import datetime
from typing import Iterable

from cryptorec.types import (PriceObservation, PriceOrder, PricePoint, Symbol,
                             TimeRange, normalize_symbol)


class PriceStore(ABC):
    """Abstract read interface over ingested price history.

    Implementations must answer every query from a consistent snapshot and
    apply the tie-break rules documented on :class:`PriceOrder`.
    """

    @abstractmethod
    def earliest_timestamp(self, symbol: Symbol) -> datetime | None:
        """Return the first recorded instant for ``symbol``, if any."""
        ...

    @abstractmethod
    def latest_timestamp(self, symbol: Symbol) -> datetime | None:
        """Return the last recorded instant for ``symbol``, if any."""
        ...

    @abstractmethod
    def point_ordered_by(
        self,
        symbol: Symbol,
        time_range: TimeRange,
        order: PriceOrder,
    ) -> PricePoint | None:
        """Return the first observation in range under the given ordering.

        :param symbol: Canonical symbol to query.
        :param time_range: Inclusive range to search.
        :param order: Ordering mode selecting the observation.
        :returns: The selected price point, or None if the range is empty.
        """
        ...

    @abstractmethod
    def all_known_symbols(self) -> list[Symbol]:
        """Return every known symbol in a stable iteration order."""
        ...

    @abstractmethod
    def symbol_exists(self, symbol: Symbol) -> bool:
        """Return True if ``symbol`` is in the known-symbol set."""
        ...


class InMemoryPriceStore(PriceStore):
    """Price store holding all observations in memory.

    Symbols are iterated alphabetically. A symbol can be registered without
    observations, which makes it known but empty.

    :param observations: Optional initial observations to load.
    """

    def __init__(self, observations: Iterable[PriceObservation] | None = None) -> None:
        self._points: dict[Symbol, list[PricePoint]] = {}
        self._timestamps: dict[Symbol, list[datetime]] = {}
        if observations is not None:
            self.extend(observations)

    def register_symbol(self, symbol: str) -> Symbol:
        """Add ``symbol`` to the known set without adding observations.

        :param symbol: Symbol in any letter case.
        :returns: The canonical symbol.
        """
        canonical = normalize_symbol(symbol)
        self._points.setdefault(canonical, [])
        self._timestamps.setdefault(canonical, [])
        return canonical

    def add(self, observation: PriceObservation) -> None:
        """Insert one observation, keeping the symbol's history time-ordered."""
        self.extend([observation])

    def extend(self, observations: Iterable[PriceObservation]) -> int:
        """Insert many observations.

        New points are appended per symbol and each touched history is sorted
        once. The sort is stable, so equal timestamps keep arrival order.

        :returns: Number of observations inserted.
        """
        pending: dict[Symbol, list[PricePoint]] = {}
        count = 0
        for observation in observations:
            symbol = self.register_symbol(observation.symbol)
            pending.setdefault(symbol, []).append(observation.to_price_point())
            count += 1

        for symbol, new_points in pending.items():
            points = self._points[symbol]
            points.extend(new_points)
            points.sort(key=lambda p: p.timestamp)
            self._timestamps[symbol] = [p.timestamp for p in points]
        return count

    def observation_count(self, symbol: Symbol | None = None) -> int:
        """Return the number of stored observations, for one or all symbols."""
        if symbol is not None:
            return len(self._points.get(symbol, []))
        return sum(len(points) for points in self._points.values())

    def earliest_timestamp(self, symbol: Symbol) -> datetime | None:
        timestamps = self._timestamps.get(symbol)
        return timestamps[0] if timestamps else None

    def latest_timestamp(self, symbol: Symbol) -> datetime | None:
        timestamps = self._timestamps.get(symbol)
        return timestamps[-1] if timestamps else None

    def point_ordered_by(
        self,
        symbol: Symbol,
        time_range: TimeRange,
        order: PriceOrder,
    ) -> PricePoint | None:
        timestamps = self._timestamps.get(symbol)
        if not timestamps:
            return None

        lo = bisect_left(timestamps, time_range.start)
        hi = bisect_right(timestamps, time_range.end)
        window = self._points[symbol][lo:hi]
        if not window:
            return None

        if order is PriceOrder.OLDEST:
            return window[0]
        if order is PriceOrder.NEWEST:
            return window[-1]
        if order is PriceOrder.MIN_PRICE:
            return min(window, key=lambda p: (p.price, p.timestamp))
        if order is PriceOrder.MAX_PRICE:
            return max(window, key=lambda p: (p.price, p.timestamp))
        raise ValueError(f"Unsupported price order: {order!r}")

    def all_known_symbols(self) -> list[Symbol]:
        return sorted(self._points)

    def symbol_exists(self, symbol: Symbol) -> bool:
        return symbol in self._points


__all__ = ["PriceStore", "InMemoryPriceStore"]
