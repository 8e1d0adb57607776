"""Ranking of symbols by normalized range."""

from __future__ import annotations

from datetime import date

from cryptorec.data.store import PriceStore
from cryptorec.engine.normalized import NormalizedRangeCalculator
from cryptorec.exceptions import NoDataError
from cryptorec.types import NormalizedRange


class RankingService:
    """Run the normalized-range calculation across every known symbol.

    :param store: Price store supplying the known-symbol set.
    :param calculator: Per-symbol normalized range calculator.
    """

    def __init__(self, store: PriceStore, calculator: NormalizedRangeCalculator) -> None:
        self.store = store
        self.calculator = calculator

    def _eligible(
        self,
        from_date: date | None,
        to_date: date | None,
    ) -> list[NormalizedRange]:
        results = []
        for symbol in self.store.all_known_symbols():
            result = self.calculator.calculate(symbol, from_date, to_date)
            if result is not None:
                results.append(result)
        return results

    def rank_all(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[NormalizedRange]:
        """Return all eligible symbols sorted by normalized range, highest first.

        Symbols without data or with a zero minimum price are left out; an
        empty list is a valid result. Equal values keep symbol iteration order.
        """
        return sorted(
            self._eligible(from_date, to_date),
            key=lambda r: r.value,
            reverse=True,
        )

    def highest_for_day(self, day: date) -> NormalizedRange:
        """Return the symbol with the highest normalized range on ``day``.

        :raises NoDataError: If no symbol has an eligible result for the day.
        """
        best: NormalizedRange | None = None
        for result in self._eligible(day, day):
            if best is None or result.value > best.value:
                best = result
        if best is None:
            raise NoDataError(day)
        return best
