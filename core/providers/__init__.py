"""
Historical price providers.

Configuration is read here, once, and handed to the provider constructor so
the providers themselves never look at process-wide settings.
"""

from config import FMP_API_KEY, FMP_BASE_URL, REQUEST_TIMEOUT_SECONDS

from .base import FetchResult, HistoricalPriceProvider
from .fmp_provider import FMPProvider


def create_default_provider() -> HistoricalPriceProvider:
    """
    Create the provider configured in config.py.

    Returns:
        FMPProvider using FMP_API_KEY, FMP_BASE_URL and REQUEST_TIMEOUT_SECONDS
    """
    return FMPProvider(
        api_key=FMP_API_KEY,
        base_url=FMP_BASE_URL,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )


__all__ = [
    "FetchResult",
    "HistoricalPriceProvider",
    "FMPProvider",
    "create_default_provider",
]
