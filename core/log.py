"""Logging setup shared by the dashboard and the data layer."""

import sys

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:8} | {name}:{function}:{line} - {message}"

_configured_level: str | None = None


def setup_logging(level: str = "INFO") -> None:
    """
    Route loguru output to a single stderr sink at *level*.

    Streamlit re-executes the page script on every interaction, so repeated
    calls with the same level are ignored instead of stacking sinks.
    """
    global _configured_level
    level = level.upper()
    if _configured_level == level:
        return

    logger.remove()
    # diagnose=False keeps local variables (API keys in request params) out of tracebacks
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, backtrace=False, diagnose=False)
    _configured_level = level
