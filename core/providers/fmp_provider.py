"""Financial Modeling Prep implementation of HistoricalPriceProvider."""

from typing import Optional

import requests
from loguru import logger

from core.exceptions import FetchError

from .base import FetchResult, HistoricalPriceProvider


class FMPProvider(HistoricalPriceProvider):
    """Daily price history from the ``historical-price-full`` endpoint.

    One GET per call: no retries and no caching. The API key is passed in by
    the caller and never written to the log.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://financialmodelingprep.com/api/v3",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def history_url(self, ticker: str) -> str:
        """Build URL for the historical-price endpoint."""
        return f"{self.base_url}/historical-price-full/{ticker.strip().upper()}"

    def fetch(self, ticker: str, from_date: Optional[str] = None) -> FetchResult:
        """Get daily history from FMP."""
        params = {"apikey": self.api_key}
        if from_date:
            params["from"] = from_date

        try:
            response = self.session.get(
                self.history_url(ticker), params=params, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            # JSON decode failures from requests also land here
            return self._failed(ticker, FetchError(f"Request for {ticker} failed", cause=e))
        except ValueError as e:
            return self._failed(ticker, FetchError(f"Malformed response for {ticker}", cause=e))

        if not isinstance(data, dict):
            error = FetchError(
                f"Malformed response for {ticker}: expected a JSON object, got {type(data).__name__}"
            )
            return self._failed(ticker, error)

        records = data.get("historical")
        count = len(records) if isinstance(records, list) else 0
        logger.info(f"[FETCH] {ticker}: {count} daily records from {self.get_name()}")
        return FetchResult(raw=data)

    def _failed(self, ticker: str, error: FetchError) -> FetchResult:
        logger.error(f"[FETCH] {ticker}: {self._redact(str(error))}")
        return FetchResult(error=error)

    def _redact(self, text: str) -> str:
        # requests puts the full URL, query string included, into its messages
        if self.api_key:
            return text.replace(self.api_key, "***")
        return text

    def get_name(self) -> str:
        """Return provider name."""
        return "fmp"
