"""Crypto recommendation package root."""

from cryptorec.exceptions import (CryptoRecError, InvalidRangeError,
                                  NoDataError, UnsupportedCryptoError)

__version__ = "0.1.0"

__all__ = [
    "CryptoRecError",
    "InvalidRangeError",
    "NoDataError",
    "UnsupportedCryptoError",
    "__version__",
]
