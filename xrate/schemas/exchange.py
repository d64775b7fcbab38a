from datetime import date
from typing import Any
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TO_CURRENCY = "EUR"


class RateQuery(BaseModel):
    """A single cross-rate lookup"""

    model_config = ConfigDict(frozen=True)

    from_currency: str = Field(..., description="Currency exchanged from")
    to_currency: str = Field(default=DEFAULT_TO_CURRENCY, description="Currency exchanged to")
    rate_date: date = Field(..., description="Date the rate applies to")


class RateResponse(BaseModel):
    """Provider response body.

    Rates are quoted against the provider's own base currency. Only the
    ``rates`` mapping is required; ``base``, ``date``, ``timestamp`` and
    ``success`` are carried through untouched when present.
    """

    model_config = ConfigDict(extra="allow")

    rates: dict[str, Any]


class ExchangeRateResponse(BaseModel):
    """Cross-rate returned by the exchange endpoint"""

    from_currency: str = Field(..., description="Currency exchanged from")
    to_currency: str = Field(..., description="Currency exchanged to")
    rate_date: date = Field(..., description="Rate date")
    rate: float = Field(..., description="Provider rate of from_currency divided by that of to_currency")
