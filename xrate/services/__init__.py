# Services module - contains business logic

from .rate_fetcher import (
    RateFetcher,
    RateResult,
    ExchangeRateServiceError,
    MissingAccessKeyError,
    ExchangeRateTransportError,
    ExchangeRateHTTPStatusError,
    ExchangeRateProtocolError,
    CurrencyNotFoundError,
)

__all__ = [
    "RateFetcher",
    "RateResult",
    "ExchangeRateServiceError",
    "MissingAccessKeyError",
    "ExchangeRateTransportError",
    "ExchangeRateHTTPStatusError",
    "ExchangeRateProtocolError",
    "CurrencyNotFoundError",
]
