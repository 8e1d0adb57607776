"""Per-symbol price statistics."""

from __future__ import annotations

from datetime import date

from cryptorec.engine.fetcher import PricePointFetcher
from cryptorec.engine.ranges import DateRangeResolver
from cryptorec.exceptions import NoDataError, UnsupportedCryptoError
from cryptorec.types import CryptoStats, PriceOrder, normalize_symbol


class StatsAggregator:
    """Combine the four characteristic price points of a symbol.

    Checks run in a fixed order: unknown symbol, then invalid range, then
    missing data. Partial results are never returned.

    :param resolver: Resolver producing the query range.
    :param fetcher: Fetcher used for the four point queries.
    """

    def __init__(self, resolver: DateRangeResolver, fetcher: PricePointFetcher) -> None:
        self.resolver = resolver
        self.fetcher = fetcher

    def get_stats(
        self,
        symbol: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> CryptoStats:
        """Return oldest, newest, min and max price points for ``symbol``.

        :param symbol: Symbol in any letter case.
        :param from_date: Optional first calendar day (inclusive).
        :param to_date: Optional last calendar day (inclusive).
        :returns: Complete CryptoStats.
        :raises UnsupportedCryptoError: If the symbol is not known.
        :raises InvalidRangeError: If the resolved range is reversed.
        :raises NoDataError: If the range holds no observations.
        """
        canonical = normalize_symbol(symbol)
        if not self.fetcher.store.symbol_exists(canonical):
            raise UnsupportedCryptoError(canonical)

        time_range = self.resolver.resolve(canonical, from_date, to_date)

        points = {}
        for order in PriceOrder:
            point = self.fetcher.fetch(canonical, time_range, order)
            if point is None:
                raise NoDataError(canonical)
            points[order] = point

        return CryptoStats(
            symbol=canonical,
            oldest=points[PriceOrder.OLDEST],
            newest=points[PriceOrder.NEWEST],
            min=points[PriceOrder.MIN_PRICE],
            max=points[PriceOrder.MAX_PRICE],
        )
