"""Price history access: the store port and ingestion sources."""

from cryptorec.data.sources import (CSVPriceSource, PriceSource,
                                    load_price_store, resolve_price_source)
from cryptorec.data.store import InMemoryPriceStore, PriceStore

__all__ = [
    "PriceStore",
    "InMemoryPriceStore",
    "PriceSource",
    "CSVPriceSource",
    "resolve_price_source",
    "load_price_store",
]
