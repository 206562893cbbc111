"""
Configuration checks surfaced on the dashboard.
"""

from loguru import logger

from config import FMP_API_KEY, is_api_key_configured

MISSING_KEY_MESSAGE = (
    "FMP_API_KEY is not set. Price requests will fail until it is added to "
    "the environment or a .env file."
)

_warned = False


def is_fmp_configured() -> bool:
    """Check if the FMP API key is configured (no network call)."""
    return is_api_key_configured(FMP_API_KEY)


def missing_config_warning() -> str | None:
    """Return a user-facing warning when the API key is missing; logs it once per process."""
    global _warned
    if is_fmp_configured():
        return None
    if not _warned:
        logger.warning(f"[CONFIG] {MISSING_KEY_MESSAGE}")
        _warned = True
    return MISSING_KEY_MESSAGE
