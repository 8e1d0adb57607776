"""Query facade exposing the engine's three logical operations."""

from __future__ import annotations

from datetime import date, timezone, tzinfo

from cryptorec.data.store import PriceStore
from cryptorec.engine.fetcher import PricePointFetcher
from cryptorec.engine.normalized import NormalizedRangeCalculator
from cryptorec.engine.ranges import DateRangeResolver
from cryptorec.engine.ranking import RankingService
from cryptorec.engine.stats import StatsAggregator
from cryptorec.types import CryptoStats, NormalizedRange


class CryptoPriceService:
    """Price statistics and normalized-range queries over a price store.

    The service holds no query state; every call re-reads the store.

    :param store: Price store to query.
    :param tz: Timezone defining calendar-day boundaries (default UTC).

    Example usage::

        store = load_price_store(CSVPriceSource({"path": "prices/"}))
        service = CryptoPriceService(store)
        stats = service.get_stats("btc", date(2022, 1, 1), date(2022, 1, 31))
        ranking = service.get_ranking()
    """

    def __init__(self, store: PriceStore, tz: tzinfo = timezone.utc) -> None:
        self.store = store
        self.resolver = DateRangeResolver(store, tz)
        self.fetcher = PricePointFetcher(store)
        self.aggregator = StatsAggregator(self.resolver, self.fetcher)
        self.calculator = NormalizedRangeCalculator(self.resolver, self.fetcher)
        self.ranking = RankingService(store, self.calculator)

    def get_stats(
        self,
        symbol: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> CryptoStats:
        """Return oldest, newest, min and max prices of ``symbol``.

        :raises UnsupportedCryptoError: If the symbol is not known.
        :raises InvalidRangeError: If the resolved range is reversed.
        :raises NoDataError: If the range holds no observations.
        """
        return self.aggregator.get_stats(symbol, from_date, to_date)

    def get_ranking(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[NormalizedRange]:
        """Return all symbols sorted descending by normalized range.

        :raises InvalidRangeError: If explicit bounds are reversed.
        """
        return self.ranking.rank_all(from_date, to_date)

    def get_highest_for_day(self, day: date) -> NormalizedRange:
        """Return the symbol with the highest normalized range on ``day``.

        :raises NoDataError: If no symbol has eligible data that day.
        """
        return self.ranking.highest_for_day(day)
