"""Tests for normalized range ranking."""

from datetime import date
from decimal import Decimal

import pytest
from factories import at, obs

from cryptorec.data.store import InMemoryPriceStore
from cryptorec.engine.fetcher import PricePointFetcher
from cryptorec.engine.normalized import NormalizedRangeCalculator
from cryptorec.engine.ranges import DateRangeResolver
from cryptorec.engine.ranking import RankingService
from cryptorec.exceptions import InvalidRangeError, NoDataError


def make_ranking(store: InMemoryPriceStore) -> RankingService:
    """Wire a ranking service over ``store``."""
    resolver = DateRangeResolver(store)
    return RankingService(store, NormalizedRangeCalculator(resolver, PricePointFetcher(store)))


@pytest.fixture
def ranking(store: InMemoryPriceStore) -> RankingService:
    """Ranking service over the default store."""
    return make_ranking(store)


class TestRankAll:
    """Tests for RankingService.rank_all."""

    def test_sorted_descending(self, ranking: RankingService) -> None:
        """ETH's wider swing ranks above BTC."""
        results = ranking.rank_all()

        assert [r.symbol for r in results] == ["ETH", "BTC"]
        assert results[1].value == Decimal("1.00000000")
        assert results[0].value > results[1].value

    def test_zero_min_and_empty_symbols_excluded(self, ranking: RankingService) -> None:
        """XRP (min 0) and DOGE (no data) never appear."""
        symbols = {r.symbol for r in ranking.rank_all()}
        assert "XRP" not in symbols
        assert "DOGE" not in symbols

    def test_zero_min_excluded_regardless_of_max(self) -> None:
        """A zero minimum excludes the symbol even with a huge maximum."""
        store = InMemoryPriceStore(
            [
                obs("BTC", at(1, 1), "100"),
                obs("BTC", at(1, 2), "110"),
                obs("XRP", at(1, 1), "0"),
                obs("XRP", at(1, 2), "1000000"),
            ]
        )
        assert [r.symbol for r in make_ranking(store).rank_all()] == ["BTC"]

    def test_empty_result_is_valid(self) -> None:
        """All symbols excluded gives an empty list."""
        store = InMemoryPriceStore([obs("XRP", at(1, 1), "0")])
        store.register_symbol("DOGE")
        assert make_ranking(store).rank_all() == []

    def test_date_bounded(self, ranking: RankingService) -> None:
        """Only symbols with data in the dates are ranked."""
        results = ranking.rank_all(date(2023, 1, 2), date(2023, 1, 2))
        assert [r.symbol for r in results] == ["BTC"]

    def test_output_is_non_increasing(self) -> None:
        """Values never increase along the ranking."""
        store = InMemoryPriceStore(
            [
                obs("AAA", at(1, 1), "10"),
                obs("AAA", at(1, 2), "11"),
                obs("BBB", at(1, 1), "10"),
                obs("BBB", at(1, 2), "30"),
                obs("CCC", at(1, 1), "10"),
                obs("CCC", at(1, 2), "15"),
                obs("DDD", at(1, 1), "10"),
                obs("DDD", at(1, 2), "15"),
            ]
        )
        results = make_ranking(store).rank_all()
        values = [r.value for r in results]
        assert values == sorted(values, reverse=True)
        # Equal values keep symbol iteration order
        assert [r.symbol for r in results] == ["BBB", "CCC", "DDD", "AAA"]

    def test_repeated_calls_are_identical(self, ranking: RankingService) -> None:
        """Ranking is idempotent against unchanged data."""
        assert ranking.rank_all() == ranking.rank_all()

    def test_from_date_skips_symbols_ending_earlier(self) -> None:
        """With only a from date, symbols whose history ends before it are skipped."""
        store = InMemoryPriceStore(
            [
                obs("BTC", at(1, 1), "100"),
                obs("BTC", at(2, 1), "120"),
                obs("BTC", at(3, 1), "150"),
                obs("ETH", at(1, 1), "10"),
                obs("ETH", at(1, 2), "20"),
            ]
        )
        results = make_ranking(store).rank_all(from_date=date(2023, 1, 2))
        assert [(r.symbol, r.value) for r in results] == [("BTC", Decimal("0.25000000"))]

    def test_to_date_skips_symbols_starting_later(self) -> None:
        """With only a to date, symbols whose history starts after it are skipped."""
        store = InMemoryPriceStore(
            [
                obs("BTC", at(1, 1), "100"),
                obs("BTC", at(2, 1), "200"),
                obs("ETH", at(5, 1), "10"),
                obs("ETH", at(5, 2), "20"),
            ]
        )
        results = make_ranking(store).rank_all(to_date=date(2023, 1, 2))
        assert [r.symbol for r in results] == ["BTC"]

    def test_reversed_range_raises(self, ranking: RankingService) -> None:
        """Reversed explicit dates are a caller error."""
        with pytest.raises(InvalidRangeError):
            ranking.rank_all(date(2023, 2, 1), date(2023, 1, 1))


class TestHighestForDay:
    """Tests for RankingService.highest_for_day."""

    def test_picks_highest(self, ranking: RankingService) -> None:
        """ETH has the widest swing on 2023-01-01."""
        result = ranking.highest_for_day(date(2023, 1, 1))
        assert result.symbol == "ETH"

    def test_single_symbol_day(self, ranking: RankingService) -> None:
        """When only one symbol has data that day, it is returned."""
        result = ranking.highest_for_day(date(2023, 1, 2))
        assert result.symbol == "BTC"
        assert result.value == Decimal("0")

    def test_day_without_data(self, ranking: RankingService) -> None:
        """A day with no eligible symbol raises NoDataError."""
        with pytest.raises(NoDataError, match="2023-01-05"):
            ranking.highest_for_day(date(2023, 1, 5))

    def test_zero_min_only_day(self) -> None:
        """A day where every symbol has a zero minimum has no winner."""
        store = InMemoryPriceStore([obs("XRP", at(1, 1), "0"), obs("XRP", at(1, 2), "4")])
        with pytest.raises(NoDataError):
            make_ranking(store).highest_for_day(date(2023, 1, 1))

    def test_ties_keep_first_symbol(self) -> None:
        """On equal values the first symbol in iteration order wins."""
        store = InMemoryPriceStore(
            [
                obs("BBB", at(1, 1), "10"),
                obs("BBB", at(1, 2), "20"),
                obs("AAA", at(1, 1), "5"),
                obs("AAA", at(1, 2), "10"),
            ]
        )
        assert make_ranking(store).highest_for_day(date(2023, 1, 1)).symbol == "AAA"
