"""Exception hierarchy for the crypto recommendation engine.

All engine-specific exceptions derive from :class:`CryptoRecError` so callers
can catch every query, configuration and ingestion failure uniformly. Each
class carries a machine-readable ``code`` that outer layers use when rendering
an error payload.
"""

from __future__ import annotations

from datetime import date

from cryptorec.types import ApiError


class CryptoRecError(Exception):
    """Base class for crypto recommendation errors.

    Derived exceptions should extend this class so that callers can catch all
    engine errors uniformly.
    """

    code = "INTERNAL_ERROR"

    def to_error_payload(self) -> ApiError:
        """Render this error as a transport-agnostic payload.

        :returns: ApiError carrying the error code and message.
        """
        return ApiError(code=self.code, message=str(self))


class UnsupportedCryptoError(CryptoRecError):
    """Raised when a requested symbol is not in the known-symbol set."""

    code = "UNSUPPORTED_CRYPTO"

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Unsupported crypto: {symbol}")


class NoDataError(CryptoRecError):
    """Raised when no price data exists for the requested symbol or day.

    :param subject: The symbol or calendar date that had no data.
    """

    code = "NO_DATA"

    def __init__(self, subject: str | date) -> None:
        self.subject = subject
        if isinstance(subject, date):
            message = f"No data for date: {subject.isoformat()}"
        else:
            message = f"No data for crypto: {subject}"
        super().__init__(message)


class InvalidRangeError(CryptoRecError):
    """Raised when a resolved date range has its start after its end."""

    code = "INVALID_REQUEST"

    def __init__(self, message: str = "'from' date must be before or equal to 'to' date") -> None:
        super().__init__(message)


class ConfigError(CryptoRecError):
    """Raised when configuration files or parameters are invalid."""

    code = "INVALID_CONFIG"


class DataSourceError(CryptoRecError):
    """Raised when reading or parsing a price data source fails."""

    code = "DATA_SOURCE_ERROR"


__all__ = [
    "CryptoRecError",
    "UnsupportedCryptoError",
    "NoDataError",
    "InvalidRangeError",
    "ConfigError",
    "DataSourceError",
]
