"""
Exchange Rate API Endpoints

Provides:
- Historical cross-rate between two currencies for one date
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from xrate.schemas.common import APIResponse, ErrorResponse
from xrate.schemas.exchange import (
    DEFAULT_TO_CURRENCY,
    ExchangeRateResponse,
    RateQuery,
)
from xrate.services.rate_fetcher import (
    CurrencyNotFoundError,
    ExchangeRateHTTPStatusError,
    ExchangeRateProtocolError,
    ExchangeRateServiceError,
    ExchangeRateTransportError,
    RateFetcher,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_rate_fetcher(request: Request) -> RateFetcher:
    """Fetcher built at startup by the application lifespan"""
    return request.app.state.rate_fetcher


def _error_status(error: ExchangeRateServiceError) -> tuple[int, str]:
    if isinstance(error, CurrencyNotFoundError):
        return 404, "CURRENCY_NOT_FOUND"
    if isinstance(error, ExchangeRateHTTPStatusError):
        return 502, "PROVIDER_HTTP_ERROR"
    if isinstance(error, ExchangeRateTransportError):
        return 502, "PROVIDER_UNREACHABLE"
    if isinstance(error, ExchangeRateProtocolError):
        return 502, "PROVIDER_BAD_RESPONSE"
    return 500, "EXCHANGE_RATE_ERROR"


@router.get("/{rate_date}", response_model=APIResponse[ExchangeRateResponse])
def get_historical_rate(
    rate_date: date,
    from_currency: str = Query(..., description="Currency exchanged from"),
    to_currency: str = Query(DEFAULT_TO_CURRENCY, description="Currency exchanged to"),
    fetcher: RateFetcher = Depends(get_rate_fetcher),
) -> APIResponse[ExchangeRateResponse]:
    """
    Get the cross-rate of from_currency against to_currency on rate_date.

    The rate is derived from the provider's quotes for both currencies
    against its own base currency.
    """
    query = RateQuery(
        from_currency=from_currency,
        to_currency=to_currency,
        rate_date=rate_date,
    )

    try:
        rate = fetcher.get_rate_for_query(query)
    except ExchangeRateServiceError as e:
        status_code, error_code = _error_status(e)
        if isinstance(e, CurrencyNotFoundError):
            logger.warning(f"Exchange rate lookup rejected ({error_code}): {e}")
        else:
            logger.error(f"Failed to fetch exchange rate ({error_code}): {e}")
        raise HTTPException(
            status_code=status_code,
            detail=ErrorResponse(
                error_code=error_code,
                message="Failed to fetch exchange rate",
                detail=str(e),
            ).model_dump(mode="json"),
        )

    return APIResponse(
        success=True,
        message="Exchange rate retrieved successfully",
        data=ExchangeRateResponse(
            from_currency=query.from_currency,
            to_currency=query.to_currency,
            rate_date=query.rate_date,
            rate=rate,
        ),
    )
