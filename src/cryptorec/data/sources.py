"""Price source implementations for loading historical price data.

This module provides an abstract interface for price sources, a CSV
implementation reading one file per symbol, and the loader that fills an
:class:`InMemoryPriceStore` from a source.
"""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from pydantic import ValidationError

from cryptorec.data.store import InMemoryPriceStore
from cryptorec.exceptions import DataSourceError
from cryptorec.types import PriceObservation, Symbol, normalize_symbol

if TYPE_CHECKING:
    from cryptorec.types import EngineConfig

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class PriceSource(ABC):
    """Abstract base class for price sources.

    All price source implementations must inherit from this class and
    implement :meth:`symbols` and :meth:`fetch_observations`.
    """

    @abstractmethod
    def symbols(self) -> list[Symbol]:
        """Return every symbol this source provides, even those without rows."""
        ...

    @abstractmethod
    def fetch_observations(self) -> Iterator[PriceObservation]:
        """Yield every price observation held by the source.

        :returns: Iterator of PriceObservation objects.
        :raises DataSourceError: If reading fails.
        """
        ...


class CSVPriceSource(PriceSource):
    """Price source that reads one CSV file per symbol.

    Expected CSV format (header row required):
    - timestamp: Epoch time in milliseconds
    - symbol: Crypto symbol (optional, must match the file name if present)
    - price: Decimal price value

    The file's symbol is the part of its name before the first underscore,
    so ``BTC_values.csv`` holds ``BTC``.

    :param source_params: Required parameters:
        - path: Directory containing price files, or a single CSV file.
        Optional parameters:
        - file_pattern: Glob pattern for files in the directory
          (default: "*_values.csv")
        - timestamp_col: Column name for timestamp (default: "timestamp")
        - symbol_col: Column name for symbol (default: "symbol")
        - price_col: Column name for price (default: "price")
        - delimiter: CSV delimiter (default: ",")
    """

    def __init__(self, source_params: dict[str, Any] | None = None) -> None:
        """Initialize CSV price source.

        :param source_params: Configuration with path and optional column mappings.
        :raises DataSourceError: If path is not provided.
        """
        self.params = source_params or {}
        self.path = self.params.get("path")
        if not self.path:
            raise DataSourceError("CSVPriceSource requires 'path' in source_params")

        self.file_pattern = self.params.get("file_pattern", "*_values.csv")
        self.timestamp_col = self.params.get("timestamp_col", "timestamp")
        self.symbol_col = self.params.get("symbol_col", "symbol")
        self.price_col = self.params.get("price_col", "price")
        self.delimiter = self.params.get("delimiter", ",")

    def files(self) -> list[Path]:
        """Return the price files to read, sorted by name.

        :raises DataSourceError: If the configured path does not exist.
        """
        path = Path(self.path)
        if not path.exists():
            raise DataSourceError(f"Price data path not found: {self.path}")
        if path.is_file():
            return [path]

        files = sorted(p for p in path.glob(self.file_pattern) if p.is_file())
        if not files:
            logger.warning("No files matching '%s' in %s", self.file_pattern, path)
        return files

    @staticmethod
    def symbol_for_file(path: Path) -> Symbol:
        """Derive the symbol from a file name (``BTC_values.csv`` -> ``BTC``).

        :raises DataSourceError: If the file name has no symbol prefix.
        """
        prefix = path.name.split("_", 1)[0] if "_" in path.name else path.stem
        if not prefix:
            raise DataSourceError(f"Cannot derive symbol from file name: {path.name}")
        return normalize_symbol(prefix)

    def symbols(self) -> list[Symbol]:
        return [self.symbol_for_file(p) for p in self.files()]

    def fetch_observations(self) -> Iterator[PriceObservation]:
        for path in self.files():
            yield from self._read_file(path)

    def _read_file(self, path: Path) -> Iterator[PriceObservation]:
        file_symbol = self.symbol_for_file(path)
        count = 0

        try:
            with open(path, newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f, delimiter=self.delimiter)

                for line_no, row in enumerate(reader, start=2):
                    row_symbol = (row.get(self.symbol_col) or "").strip()
                    if row_symbol and normalize_symbol(row_symbol) != file_symbol:
                        raise DataSourceError(
                            f"{path.name}:{line_no}: symbol '{row_symbol}' "
                            f"does not match file symbol '{file_symbol}'"
                        )

                    yield self._parse_row(row, file_symbol, f"{path.name}:{line_no}")
                    count += 1

        except csv.Error as e:
            raise DataSourceError(f"CSV parsing error in {path.name}: {e}") from e
        except UnicodeDecodeError as e:
            raise DataSourceError(f"{path.name} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise DataSourceError(f"Failed to read CSV file {path}: {e}") from e

        if count == 0:
            logger.warning("Price file %s holds no rows for %s", path.name, file_symbol)
        else:
            logger.debug("Read %d observations for %s from %s", count, file_symbol, path.name)

    def _parse_row(
        self,
        row: dict[str, str],
        symbol: Symbol,
        location: str,
    ) -> PriceObservation:
        raw_ts = (row.get(self.timestamp_col) or "").strip()
        raw_price = (row.get(self.price_col) or "").strip()
        if not raw_ts or not raw_price:
            raise DataSourceError(f"{location}: missing timestamp or price in row {row}")

        try:
            timestamp = _EPOCH + timedelta(milliseconds=int(raw_ts))
        except (ValueError, OverflowError) as e:
            raise DataSourceError(f"{location}: invalid timestamp '{raw_ts}': {e}") from e

        try:
            price = Decimal(raw_price)
        except InvalidOperation as e:
            raise DataSourceError(f"{location}: invalid price '{raw_price}'") from e

        try:
            return PriceObservation(symbol=symbol, timestamp=timestamp, price=price)
        except ValidationError as e:
            raise DataSourceError(f"{location}: invalid observation: {e}") from e


def resolve_price_source(config: EngineConfig) -> PriceSource:
    """Construct a price source from configuration.

    :param config: EngineConfig with data_source, data_dir and file_pattern.
    :returns: PriceSource instance for the specified type.
    :raises DataSourceError: If data_source type is unrecognized.
    """
    source_type = config.data_source.lower()

    if source_type == "csv":
        return CSVPriceSource(
            {"path": str(config.data_dir), "file_pattern": config.file_pattern}
        )
    raise DataSourceError(
        f"Unrecognized data source type: '{config.data_source}'. "
        f"Supported types: csv"
    )


def load_price_store(source: PriceSource) -> InMemoryPriceStore:
    """Bulk-load every observation of ``source`` into a new in-memory store.

    Symbols are registered before their rows are read, so a symbol whose file
    is empty is still known.

    :param source: Price source to read.
    :returns: Populated InMemoryPriceStore.
    :raises DataSourceError: If reading fails.
    """
    store = InMemoryPriceStore()
    for symbol in source.symbols():
        store.register_symbol(symbol)

    loaded = store.extend(source.fetch_observations())
    logger.info(
        "Loaded %d price observations for %d symbols",
        loaded,
        len(store.all_known_symbols()),
    )
    return store


__all__ = [
    "PriceSource",
    "CSVPriceSource",
    "resolve_price_source",
    "load_price_store",
]
