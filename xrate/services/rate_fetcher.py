"""
Historical Exchange Rate Fetcher

Looks up provider rates for one calendar date and derives the cross-rate
between two currencies:

    GET {base_url}/{YYYY-MM-DD}?access_key=...&symbols=FROM,TO
    -> {"rates": {"FROM": x, "TO": y, ...}}
    -> x / y

Every call is a single blocking request. Nothing is cached or retried, and
each failure surfaces as one of the ExchangeRateServiceError subclasses.
"""

import logging
import math
import threading
from dataclasses import dataclass
from datetime import date
from typing import Any, overload
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from xrate.core.config import ACCESS_KEY_ENV_VAR, RateFetcherConfig, Settings
from xrate.schemas.exchange import DEFAULT_TO_CURRENCY, RateQuery, RateResponse

logger = logging.getLogger(__name__)

REDACTED = "REDACTED"


class ExchangeRateServiceError(Exception):
    """Base exception for exchange rate service"""

    kind = "unknown"


class MissingAccessKeyError(ExchangeRateServiceError, RuntimeError):
    """No provider access key was configured"""

    kind = "config"

    def __init__(self, message: str | None = None):
        super().__init__(
            message or f"{ACCESS_KEY_ENV_VAR} is not set; a provider access key is required"
        )


class ExchangeRateTransportError(ExchangeRateServiceError, OSError):
    """The request could not be completed (DNS, connection, timeout)"""

    kind = "transport"


class ExchangeRateHTTPStatusError(ExchangeRateTransportError):
    """The provider answered with a non-success status"""

    def __init__(self, message: str, *, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ExchangeRateProtocolError(ExchangeRateServiceError, ValueError):
    """The response body is not JSON or not shaped like a rates payload"""

    kind = "protocol"


class CurrencyNotFoundError(ExchangeRateServiceError, LookupError):
    """A requested currency code is absent from the provider's rates"""

    kind = "data"

    def __init__(self, currency: str):
        super().__init__(f"Currency {currency!r} not found in provider rates")
        self.currency = currency


@dataclass(frozen=True)
class RateResult:
    """Outcome of a lookup: either a value or the error that prevented it"""

    value: float | None = None
    error: ExchangeRateServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> str:
        """Either "ok" or the failure kind of the error"""
        return "ok" if self.error is None else self.error.kind

    def unwrap(self) -> float:
        if self.error is not None:
            raise self.error
        return self.value


def _encode(value: str) -> str:
    return quote(value, safe="")


def _divide(numerator: float, denominator: float) -> float:
    """Float division with IEEE-754 results for a zero denominator"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _as_rate(value: Any, currency: str) -> float:
    # Numbers and numeric strings are accepted, like a lenient JSON getter
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ExchangeRateProtocolError(
            f"Rate for {currency!r} is not numeric: {value!r}"
        )
    try:
        return float(value)
    except OverflowError:
        # Only integers beyond float range get here; they saturate to infinity
        return math.inf if value > 0 else -math.inf
    except ValueError as e:
        raise ExchangeRateProtocolError(
            f"Rate for {currency!r} is not numeric: {value!r}"
        ) from e


class RateFetcher:
    """
    Client for a Fixer-style historical rates endpoint.

    The access key is checked at construction; MissingAccessKeyError is
    raised before any request is made.
    """

    def __init__(
        self,
        config: RateFetcherConfig,
        client: httpx.Client | None = None,
    ):
        if not config.access_key:
            raise MissingAccessKeyError()
        self.base_url = config.base_url
        self.timeout = config.timeout
        self._access_key = config.access_key
        self._http_client = client
        self._owns_client = client is None
        self._client_lock = threading.Lock()

    @classmethod
    def from_env(
        cls,
        base_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> "RateFetcher":
        """Build a fetcher whose access key comes from FIXER_IO_ACCESS_KEY"""
        return cls(Settings().rate_fetcher_config(base_url), client=client)

    def _get_http_client(self) -> httpx.Client:
        """Get or create HTTP client for API calls"""
        # Shared by threadpool workers; at most one client is created
        with self._client_lock:
            if self._http_client is None:
                self._http_client = httpx.Client(
                    timeout=self.timeout, follow_redirects=True
                )
            return self._http_client

    def close(self) -> None:
        """Close HTTP client if this fetcher created it"""
        with self._client_lock:
            if self._http_client is not None and self._owns_client:
                self._http_client.close()
                self._http_client = None

    def __enter__(self) -> "RateFetcher":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # =========================================================================
    # URL construction
    # =========================================================================

    def _compose_url(
        self,
        access_key: str,
        from_currency: str,
        to_currency: str,
        year: int,
        month: int,
        day: int,
    ) -> str:
        return (
            f"{self.base_url}/{year:04d}-{month:02d}-{day:02d}"
            f"?access_key={_encode(access_key)}"
            f"&symbols={_encode(from_currency)},{_encode(to_currency)}"
        )

    def build_url(
        self,
        from_currency: str,
        to_currency: str,
        year: int,
        month: int,
        day: int,
    ) -> str:
        """
        Request URL for one date and currency pair.

        The date is rendered YYYY-MM-DD without calendar validation. The
        access key and both codes are percent-encoded; the comma between
        the codes is not.
        """
        return self._compose_url(
            self._access_key, from_currency, to_currency, year, month, day
        )

    # =========================================================================
    # Rate lookup
    # =========================================================================

    @overload
    def get_exchange_rate(
        self, currency_code: str, year: int, month: int, day: int
    ) -> float: ...

    @overload
    def get_exchange_rate(
        self, from_currency: str, to_currency: str, year: int, month: int, day: int
    ) -> float: ...

    def get_exchange_rate(self, from_currency: str, *args: Any) -> float:
        """
        Cross-rate of from_currency against to_currency on a date.

        Called either as (from_currency, to_currency, year, month, day) or as
        (currency_code, year, month, day), in which case to_currency is EUR.

        Returns:
            rates[from_currency] / rates[to_currency] from the provider payload

        Raises:
            ExchangeRateTransportError: request failed or non-success status
            ExchangeRateProtocolError: body is not a JSON rates payload
            CurrencyNotFoundError: a requested code is missing from the rates
        """
        to_currency, year, month, day = self._split_args(args)
        return self._fetch_cross_rate(from_currency, to_currency, year, month, day)

    rate = get_exchange_rate

    def try_get_exchange_rate(self, from_currency: str, *args: Any) -> RateResult:
        """Same lookup as get_exchange_rate, returning failures as a RateResult"""
        to_currency, year, month, day = self._split_args(args)
        try:
            value = self._fetch_cross_rate(from_currency, to_currency, year, month, day)
        except ExchangeRateServiceError as e:
            return RateResult(error=e)
        return RateResult(value=value)

    def get_rate_for_query(self, query: RateQuery) -> float:
        d = query.rate_date
        return self._fetch_cross_rate(
            query.from_currency, query.to_currency, d.year, d.month, d.day
        )

    def get_rate_for_date(
        self,
        from_currency: str,
        rate_date: date,
        to_currency: str = DEFAULT_TO_CURRENCY,
    ) -> float:
        query = RateQuery(
            from_currency=from_currency,
            to_currency=to_currency,
            rate_date=rate_date,
        )
        return self.get_rate_for_query(query)

    @staticmethod
    def _split_args(args: tuple) -> tuple[str, int, int, int]:
        if len(args) == 4:
            to_currency, year, month, day = args
        elif len(args) == 3:
            to_currency = DEFAULT_TO_CURRENCY
            year, month, day = args
        else:
            raise TypeError(
                "get_exchange_rate() expects (from_currency, [to_currency,] "
                f"year, month, day), got {len(args) + 1} arguments"
            )
        return to_currency, year, month, day

    def _fetch_cross_rate(
        self,
        from_currency: str,
        to_currency: str,
        year: int,
        month: int,
        day: int,
    ) -> float:
        url = self.build_url(from_currency, to_currency, year, month, day)
        safe_url = self._compose_url(
            REDACTED, from_currency, to_currency, year, month, day
        )
        logger.debug(f"Fetching exchange rates: {safe_url}")

        rates = self._fetch_rates(url, safe_url)
        numerator = self._lookup(rates, from_currency)
        denominator = self._lookup(rates, to_currency)
        return _divide(numerator, denominator)

    def _fetch_rates(self, url: str, safe_url: str) -> dict[str, Any]:
        """Issue the GET and return the payload's rates mapping"""
        client = self._get_http_client()

        try:
            response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"Rate provider returned HTTP {status_code} for {safe_url}")
            raise ExchangeRateHTTPStatusError(
                f"Rate provider returned HTTP {status_code} for {safe_url}",
                status_code=status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Rate provider request failed for {safe_url}: {type(e).__name__}")
            raise ExchangeRateTransportError(
                f"Request to rate provider failed: {type(e).__name__}"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning(f"Rate provider returned a non-JSON body for {safe_url}")
            raise ExchangeRateProtocolError("Rate provider response is not valid JSON") from e

        try:
            body = RateResponse.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Rate provider payload has no rates object for {safe_url}")
            raise ExchangeRateProtocolError(
                "Rate provider response has no 'rates' object"
            ) from e

        return body.rates

    @staticmethod
    def _lookup(rates: dict[str, Any], currency: str) -> float:
        if currency not in rates:
            logger.warning(f"Currency {currency} missing from provider rates")
            raise CurrencyNotFoundError(currency)
        return _as_rate(rates[currency], currency)
