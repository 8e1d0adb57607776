"""Shared fixtures for engine tests."""

import pytest
from factories import at, obs

from cryptorec.data.store import InMemoryPriceStore
from cryptorec.engine import CryptoPriceService


@pytest.fixture
def store() -> InMemoryPriceStore:
    """Store with BTC, ETH, a zero-min XRP and an empty DOGE.

    BTC: 2023-01-01 min 100 / max 200, plus one point on 2023-01-02.
    ETH: 2023-01-01 only, min 123.456 / max 654.321.
    XRP: 2023-01-01 only, min 0.
    DOGE: known, no observations.
    """
    store = InMemoryPriceStore(
        [
            obs("BTC", at(1, 0), "150"),
            obs("BTC", at(1, 6), "100"),
            obs("BTC", at(1, 18), "200"),
            obs("BTC", at(2, 12), "180"),
            obs("ETH", at(1, 3), "123.456"),
            obs("ETH", at(1, 20), "654.321"),
            obs("XRP", at(1, 1), "0"),
            obs("XRP", at(1, 2), "5"),
        ]
    )
    store.register_symbol("DOGE")
    return store


@pytest.fixture
def service(store: InMemoryPriceStore) -> CryptoPriceService:
    """Query service over the default store."""
    return CryptoPriceService(store)
