"""Abstract base class for historical price providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from core.exceptions import FetchError


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch: the decoded response body or the error, never both."""

    raw: Optional[dict] = None
    error: Optional[FetchError] = None

    def __post_init__(self):
        if (self.raw is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of raw or error")

    @property
    def ok(self) -> bool:
        return self.error is None


class HistoricalPriceProvider(ABC):
    """Abstract base class for historical price sources."""

    @abstractmethod
    def fetch(self, ticker: str, from_date: Optional[str] = None) -> FetchResult:
        """
        Get the daily price history for a ticker.

        Parameters:
            ticker: Stock symbol (e.g., "AAPL")
            from_date: First calendar day to include, ``YYYY-MM-DD``; provider default if None

        Returns:
            FetchResult with the decoded JSON object on success, or a FetchError.
            Implementations must not raise for transport or decoding failures.
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return provider name for logging."""
        pass
