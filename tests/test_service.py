"""Tests for the query facade."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

import pytest
from factories import at, obs

from cryptorec.data.store import InMemoryPriceStore
from cryptorec.engine import CryptoPriceService
from cryptorec.exceptions import (InvalidRangeError, NoDataError,
                                  UnsupportedCryptoError)


class TestCryptoPriceService:
    """End-to-end tests for the three logical operations."""

    def test_get_stats(self, service: CryptoPriceService) -> None:
        """get_stats returns the four characteristic points."""
        stats = service.get_stats("eth")
        assert stats.symbol == "ETH"
        assert stats.min.price == Decimal("123.456")
        assert stats.max.price == Decimal("654.321")
        assert stats.oldest.timestamp == at(1, 3)
        assert stats.newest.timestamp == at(1, 20)

    def test_get_stats_errors(self, service: CryptoPriceService) -> None:
        """Each error kind surfaces directly."""
        with pytest.raises(UnsupportedCryptoError):
            service.get_stats("LTC")
        with pytest.raises(InvalidRangeError):
            service.get_stats("BTC", date(2023, 2, 1), date(2023, 1, 1))
        with pytest.raises(NoDataError):
            service.get_stats("BTC", date(2022, 1, 1), date(2022, 12, 31))

    def test_get_ranking(self, service: CryptoPriceService) -> None:
        """ETH(123.456 to 654.321) ranks above BTC(100 to 200)."""
        ranking = service.get_ranking()

        eth_min, eth_max = Decimal("123.456"), Decimal("654.321")
        eth_value = ((eth_max - eth_min) / eth_min).quantize(
            Decimal("0.00000001"), rounding=ROUND_HALF_UP
        )
        assert [(r.symbol, r.value) for r in ranking] == [
            ("ETH", eth_value),
            ("BTC", Decimal("1.00000000")),
        ]

    def test_get_ranking_with_only_from_date(self, service: CryptoPriceService) -> None:
        """Symbols with no history on or after the from date drop out of the ranking."""
        ranking = service.get_ranking(from_date=date(2023, 1, 2))
        assert [(r.symbol, r.value) for r in ranking] == [("BTC", Decimal("0E-8"))]

    def test_get_highest_for_day(self, service: CryptoPriceService) -> None:
        """The day winner is the symbol with the widest swing."""
        assert service.get_highest_for_day(date(2023, 1, 1)).symbol == "ETH"
        with pytest.raises(NoDataError):
            service.get_highest_for_day(date(2024, 1, 1))

    def test_idempotent(self, service: CryptoPriceService) -> None:
        """Identical calls on unchanged data give identical results."""
        assert service.get_stats("BTC") == service.get_stats("BTC")
        assert service.get_ranking() == service.get_ranking()

    def test_timezone_moves_day_boundaries(self) -> None:
        """A late-UTC observation belongs to the previous day further west."""
        store = InMemoryPriceStore(
            [
                obs("BTC", at(2, 2), "100"),
                obs("BTC", at(2, 3), "150"),
            ]
        )
        utc_service = CryptoPriceService(store)
        ny_service = CryptoPriceService(store, ZoneInfo("America/New_York"))

        assert utc_service.get_highest_for_day(date(2023, 1, 2)).symbol == "BTC"
        with pytest.raises(NoDataError):
            ny_service.get_highest_for_day(date(2023, 1, 2))
        assert ny_service.get_highest_for_day(date(2023, 1, 1)).value == Decimal("0.5")
