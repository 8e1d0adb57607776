"""Price statistics and normalized-range computation engine."""

from cryptorec.engine.fetcher import PricePointFetcher
from cryptorec.engine.normalized import (SCALE, NormalizedRangeCalculator,
                                         normalized_value, round_half_up)
from cryptorec.engine.ranges import DateRangeResolver, end_of_day, start_of_day
from cryptorec.engine.ranking import RankingService
from cryptorec.engine.service import CryptoPriceService
from cryptorec.engine.stats import StatsAggregator

__all__ = [
    # Ranges
    "DateRangeResolver",
    "start_of_day",
    "end_of_day",
    # Fetching
    "PricePointFetcher",
    # Statistics
    "StatsAggregator",
    # Normalized range
    "SCALE",
    "NormalizedRangeCalculator",
    "normalized_value",
    "round_half_up",
    # Ranking
    "RankingService",
    # Facade
    "CryptoPriceService",
]
