"""Normalized price range calculation.

The normalized range of a symbol is ``(max - min) / min`` over a range,
rounded half-up to :data:`SCALE` fractional digits. The quotient is computed
exactly and rounded once, so no intermediate precision limit can shift the
last digit.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from fractions import Fraction

from cryptorec.engine.fetcher import PricePointFetcher
from cryptorec.engine.ranges import DateRangeResolver
from cryptorec.exceptions import InvalidRangeError, NoDataError
from cryptorec.types import NormalizedRange, Symbol

SCALE = 8


def round_half_up(value: Fraction, scale: int = SCALE) -> Decimal:
    """Round a non-negative exact value to ``scale`` fractional digits, half up.

    :param value: Exact non-negative value.
    :param scale: Number of fractional digits to keep.
    :returns: Decimal with exactly ``scale`` fractional digits.
    """
    if value < 0:
        raise ValueError("round_half_up expects a non-negative value")
    scaled = value * 10**scale
    whole, remainder = divmod(scaled.numerator, scaled.denominator)
    if 2 * remainder >= scaled.denominator:
        whole += 1
    return Decimal(f"{whole}E-{scale}")


def normalized_value(min_price: Decimal, max_price: Decimal) -> Decimal | None:
    """Return ``(max - min) / min`` rounded half-up, or None when ``min`` is zero."""
    if min_price == 0:
        return None
    low = Fraction(min_price)
    return round_half_up((Fraction(max_price) - low) / low)


class NormalizedRangeCalculator:
    """Compute the normalized range of one symbol.

    Produces None instead of raising when the symbol has no observations in
    the range or its minimum price is zero, so callers ranking many symbols
    can skip ineligible ones. A range that only comes out reversed because an
    omitted bound fell back to the symbol's own history is ineligible too.

    :param resolver: Resolver producing the query range.
    :param fetcher: Fetcher used for the min and max queries.
    """

    def __init__(self, resolver: DateRangeResolver, fetcher: PricePointFetcher) -> None:
        self.resolver = resolver
        self.fetcher = fetcher

    def calculate(
        self,
        symbol: Symbol,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> NormalizedRange | None:
        """Return the normalized range of ``symbol``, or None if ineligible.

        :param symbol: Canonical, known symbol.
        :param from_date: Optional first calendar day (inclusive).
        :param to_date: Optional last calendar day (inclusive).
        :raises InvalidRangeError: If both dates are given and reversed.
        """
        try:
            time_range = self.resolver.resolve(symbol, from_date, to_date)
        except NoDataError:
            # Symbol has no history at all, so an omitted bound is unresolvable
            return None
        except InvalidRangeError:
            if from_date is not None and to_date is not None:
                raise
            # History lies entirely outside the one explicit bound
            return None

        low = self.fetcher.min_price(symbol, time_range)
        high = self.fetcher.max_price(symbol, time_range)
        if low is None or high is None:
            return None

        value = normalized_value(low.price, high.price)
        if value is None:
            return None
        return NormalizedRange(symbol=symbol, value=value)
