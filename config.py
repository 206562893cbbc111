"""
Central configuration for the Price Delta Viewer.
All tunables live here so they're easy to find and override via env vars.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ────────────────────────────────────────────────────────────────────
BASE_DIR = Path(__file__).parent          # project root

# ── Financial Modeling Prep ──────────────────────────────────────────────────
FMP_API_KEY = os.getenv("FMP_API_KEY", "")
FMP_BASE_URL = os.getenv("FMP_BASE_URL", "https://financialmodelingprep.com/api/v3")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "10"))

# ── Chart defaults ───────────────────────────────────────────────────────────
DEFAULT_TICKER = os.getenv("DEFAULT_TICKER", "AAPL").strip().upper()
DEFAULT_FROM_DATE = os.getenv("DEFAULT_FROM_DATE", "2024-02-03")

# strftime pattern for the drag readout; %x is the locale's date representation
DATE_FORMAT = os.getenv("DATE_FORMAT", "%x")

# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def is_api_key_configured(api_key: str | None = None) -> bool:
    """Check whether an FMP API key is present (does not hit the network)."""
    key = FMP_API_KEY if api_key is None else api_key
    return bool(key and key.strip())
