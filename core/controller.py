"""
View controller: fetch → normalize orchestration behind the chart page.

The raw response is fetched once per ticker (or start date) and kept; picking
a different price field only re-runs the normalizer over the kept response.

Every fetch gets a generation number. A response that comes back for an
older generation than the latest requested one is dropped, so a slow reply
for a previous ticker cannot overwrite the current one.
"""

from dataclasses import dataclass, replace
from typing import List, Optional

from loguru import logger

from config import DEFAULT_FROM_DATE, DEFAULT_TICKER
from core.exceptions import FetchError
from core.providers.base import FetchResult, HistoricalPriceProvider
from core.series import PRICE_FIELDS, PricePoint, extract_records, normalize


@dataclass(frozen=True)
class ViewState:
    """What the page needs to decide between spinner, error and chart."""

    ticker: str
    field: str
    from_date: Optional[str]
    loading: bool = True
    error: Optional[FetchError] = None


class SeriesViewController:
    def __init__(
        self,
        provider: HistoricalPriceProvider,
        ticker: str = DEFAULT_TICKER,
        field: str = PRICE_FIELDS[0],
        from_date: Optional[str] = DEFAULT_FROM_DATE,
    ):
        if field not in PRICE_FIELDS:
            raise ValueError(f"Unknown price field: {field!r}")
        self.provider = provider
        self._state = ViewState(ticker=_clean_ticker(ticker), field=field, from_date=from_date)
        self._records: List[dict] = []
        self._generation = 0
        self._loaded_key: Optional[tuple[str, Optional[str]]] = None

    # ── State ────────────────────────────────────────────────────────────────
    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[FetchError]:
        return self._state.error

    @property
    def record_count(self) -> int:
        return len(self._records)

    @property
    def series(self) -> List[PricePoint]:
        """Kept records projected onto the selected field."""
        return normalize(self._records, self._state.field)

    # ── Inputs ───────────────────────────────────────────────────────────────
    def set_field(self, field: str) -> None:
        """Switch the plotted field. Never touches the network."""
        if field not in PRICE_FIELDS:
            raise ValueError(f"Unknown price field: {field!r}")
        if field != self._state.field:
            logger.debug(f"[CONTROLLER] Field {self._state.field} → {field}")
            self._state = replace(self._state, field=field)

    def set_ticker(self, ticker: str) -> bool:
        """Select a ticker, fetching only if it differs from what is loaded. Returns True if fetched."""
        self._state = replace(self._state, ticker=_clean_ticker(ticker))
        return self._ensure_loaded()

    def set_from_date(self, from_date: Optional[str]) -> bool:
        """Change the first day requested, fetching if it changed. Returns True if fetched."""
        self._state = replace(self._state, from_date=from_date or None)
        return self._ensure_loaded()

    def set_source(self, ticker: str, from_date: Optional[str]) -> bool:
        """Change ticker and start date together with at most one fetch. Returns True if fetched."""
        self._state = replace(self._state, ticker=_clean_ticker(ticker), from_date=from_date or None)
        return self._ensure_loaded()

    def refresh(self) -> None:
        """Fetch the current ticker again regardless of what is loaded."""
        self.load()

    def _ensure_loaded(self) -> bool:
        key = (self._state.ticker, self._state.from_date)
        if key == self._loaded_key:
            return False
        self.load()
        return True

    # ── Fetch lifecycle ──────────────────────────────────────────────────────
    def load(self) -> None:
        """Fetch the current ticker synchronously and apply the result."""
        generation = self.begin_fetch()
        ticker, from_date = self._state.ticker, self._state.from_date
        try:
            result = self.provider.fetch(ticker, from_date)
        except Exception as e:
            # Providers should report failures in the result; anything that escapes stops here.
            logger.exception(f"[CONTROLLER] {self.provider.get_name()} raised while fetching {ticker}")
            result = FetchResult(error=FetchError(f"{self.provider.get_name()} raised while fetching {ticker}", cause=e))
        self.complete_fetch(generation, result, key=(ticker, from_date))

    def begin_fetch(self) -> int:
        """Mark a fetch as started and return its generation number."""
        self._generation += 1
        self._state = replace(self._state, loading=True, error=None)
        return self._generation

    def complete_fetch(
        self,
        generation: int,
        result: FetchResult,
        key: Optional[tuple[str, Optional[str]]] = None,
    ) -> bool:
        """
        Apply a finished fetch. Returns False (and changes nothing) when the
        fetch has been superseded by a newer one.
        """
        if generation != self._generation:
            logger.info(
                f"[CONTROLLER] Dropping stale response (generation {generation}, current {self._generation})"
            )
            return False

        if key is None:
            key = (self._state.ticker, self._state.from_date)

        if result.ok:
            self._records = extract_records(result.raw)
            self._state = replace(self._state, loading=False, error=None)
            if not self._records:
                logger.warning(f"[CONTROLLER] {key[0]}: response has no historical records")
        else:
            self._records = []
            self._state = replace(self._state, loading=False, error=result.error)
            logger.error(f"[CONTROLLER] {key[0]}: fetch failed ({type(result.error).__name__})")

        self._loaded_key = key
        return True


def _clean_ticker(ticker: str) -> str:
    return (ticker or "").strip().upper()
