"""
Series normalizer: projects raw historical records onto one price field.

The provider returns a JSON object whose ``historical`` key holds daily
records (``date`` plus numeric fields). Charting needs a flat sequence of
(timestamp, value) pairs for the field the user picked, so this module turns
one into the other without touching the network.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Iterable, List, Optional

import pandas as pd

PRICE_FIELDS = (
    "open",
    "high",
    "low",
    "close",
    "adjClose",
    "volume",
    "unadjustedVolume",
    "change",
)


@dataclass(frozen=True)
class PricePoint:
    """One observation: epoch milliseconds (UTC) and the selected field's value."""

    timestamp: Optional[int]
    value: Optional[float]


def parse_timestamp_ms(raw_date: Any) -> Optional[int]:
    """Parse a calendar date into epoch milliseconds, treating naive dates as UTC."""
    if raw_date is None:
        return None
    try:
        ts = pd.Timestamp(raw_date)
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return int(ts.value // 1_000_000)


def _coerce_value(raw_value: Any) -> Optional[float]:
    # bool is a Real subclass but never a price
    if isinstance(raw_value, bool) or not isinstance(raw_value, Real):
        return None
    value = float(raw_value)
    if not math.isfinite(value):
        return None
    return value


def extract_records(raw: Any) -> List[dict]:
    """
    Pull the record list out of a provider response.

    Accepts the full response object, a bare list of records, or ``None``.
    Anything without a usable ``historical`` list yields an empty list.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        records = raw.get("historical")
    else:
        records = raw
    if not isinstance(records, list):
        return []
    return records


def normalize(raw: Any, field: str) -> List[PricePoint]:
    """
    Convert raw records into ``PricePoint`` values for *field*.

    One point per record, in input order. A field the record does not carry
    (or a non-numeric value) becomes ``value=None``; an unparseable date
    becomes ``timestamp=None``. Both are drawn as gaps rather than failing.
    """
    points: List[PricePoint] = []
    for record in extract_records(raw):
        if not isinstance(record, dict):
            points.append(PricePoint(timestamp=None, value=None))
            continue
        points.append(
            PricePoint(
                timestamp=parse_timestamp_ms(record.get("date")),
                value=_coerce_value(record.get(field)),
            )
        )
    return points


def to_frame(points: Iterable[PricePoint]) -> pd.DataFrame:
    """Build a ``date``/``value`` DataFrame for plotting (UTC datetimes, NaN for gaps)."""
    rows = list(points)
    return pd.DataFrame(
        {
            "date": pd.to_datetime(
                [p.timestamp for p in rows], unit="ms", utc=True, errors="coerce"
            ),
            "value": pd.to_numeric(
                pd.Series([p.value for p in rows], dtype="object"), errors="coerce"
            ),
        }
    )
