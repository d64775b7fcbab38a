"""xrate - historical currency exchange rates from a Fixer-style API"""

from .services.rate_fetcher import RateFetcher

__all__ = ["RateFetcher"]
