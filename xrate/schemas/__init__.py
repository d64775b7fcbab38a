from .common import APIResponse, ErrorResponse
from .exchange import (
    DEFAULT_TO_CURRENCY,
    RateQuery,
    RateResponse,
    ExchangeRateResponse,
)

__all__ = [
    # Common
    "APIResponse",
    "ErrorResponse",
    # Exchange
    "DEFAULT_TO_CURRENCY",
    "RateQuery",
    "RateResponse",
    "ExchangeRateResponse",
]
