"""Single price point retrieval from the store."""

from __future__ import annotations

from cryptorec.data.store import PriceStore
from cryptorec.types import PriceOrder, PricePoint, Symbol, TimeRange


class PricePointFetcher:
    """Fetch one price point per ordering mode within a resolved range.

    An empty range yields None; absence is a normal outcome here, never an
    error.

    :param store: Price store to query.
    """

    def __init__(self, store: PriceStore) -> None:
        self.store = store

    def fetch(
        self,
        symbol: Symbol,
        time_range: TimeRange,
        order: PriceOrder,
    ) -> PricePoint | None:
        """Return the first observation of ``symbol`` in range under ``order``."""
        return self.store.point_ordered_by(symbol, time_range, order)

    def oldest(self, symbol: Symbol, time_range: TimeRange) -> PricePoint | None:
        return self.fetch(symbol, time_range, PriceOrder.OLDEST)

    def newest(self, symbol: Symbol, time_range: TimeRange) -> PricePoint | None:
        return self.fetch(symbol, time_range, PriceOrder.NEWEST)

    def min_price(self, symbol: Symbol, time_range: TimeRange) -> PricePoint | None:
        return self.fetch(symbol, time_range, PriceOrder.MIN_PRICE)

    def max_price(self, symbol: Symbol, time_range: TimeRange) -> PricePoint | None:
        return self.fetch(symbol, time_range, PriceOrder.MAX_PRICE)
