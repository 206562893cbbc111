"""
Tests for dashboard chart building, selection bridging and config checks.

Usage:
    pytest testing/test_dashboard.py -v
"""

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from core.overlay import DragDeltaOverlay, GesturePhase
from core.series import normalize
from core.surface import SeriesSurface
from dashboard.utils.charts import create_price_chart, default_tooltip, tooltip_template
from dashboard.utils.gesture import apply_selection, selection_box_x

RECORDS = [
    {"date": "2024-01-05", "close": 110.0},
    {"date": "2024-01-04", "close": 108.0},
    {"date": "2024-01-03", "close": None},
    {"date": "2024-01-02", "close": 104.0},
    {"date": "2024-01-01", "close": 100.0},
]


def _selection_event(x0, x1) -> dict:
    """Shape of st.plotly_chart's selection state for one box."""
    return {
        "selection": {
            "points": [],
            "point_indices": [],
            "box": [{"type": "box", "xref": "x", "yref": "y", "x": [x0, x1], "y": [90, 120]}],
            "lasso": [],
        }
    }


@pytest.fixture
def points():
    return normalize(RECORDS, "close")


@pytest.fixture
def overlay():
    return DragDeltaOverlay(date_format="%Y-%m-%d")


class TestSelectionBridge:
    def test_box_becomes_a_drag(self, overlay, points):
        result = apply_selection(overlay, SeriesSurface(points), _selection_event("2024-01-05", "2024-01-01"))

        assert result.percent == -9.09
        assert overlay.phase is GesturePhase.DRAGGING
        assert overlay.current == result

    @pytest.mark.parametrize(
        "event",
        [None, {}, {"selection": {}}, {"selection": {"box": []}}, {"selection": {"box": [{"x": ["2024-01-01"]}]}}],
    )
    def test_no_box_ends_the_drag(self, overlay, points, event):
        surface = SeriesSurface(points)
        apply_selection(overlay, surface, _selection_event("2024-01-01", "2024-01-05"))

        assert apply_selection(overlay, surface, event) is None
        assert overlay.phase is GesturePhase.IDLE
        assert overlay.current is None

    def test_box_off_the_data_is_inert(self, overlay, points):
        result = apply_selection(overlay, SeriesSurface(points), _selection_event("2023-01-01", "2023-02-01"))

        assert result is None
        assert overlay.phase is GesturePhase.IDLE

    def test_latest_box_wins(self):
        event = _selection_event("2024-01-01", "2024-01-02")
        event["selection"]["box"].append({"x": ["2024-01-04", "2024-01-05"]})

        assert selection_box_x(event) == ("2024-01-04", "2024-01-05")


class TestTooltip:
    def test_default_template(self):
        assert tooltip_template("AAPL", "close") == default_tooltip("AAPL", "close") + "<extra></extra>"

    def test_idle_overlay_keeps_default(self, overlay):
        assert tooltip_template("AAPL", "close", overlay) == tooltip_template("AAPL", "close")

    def test_active_overlay_replaces_default(self, overlay, points):
        apply_selection(overlay, SeriesSurface(points), _selection_event("2024-01-01", "2024-01-05"))

        assert tooltip_template("AAPL", "close", overlay) == (
            "2024-01-01 - 2024-01-05<br><span>Total: <b>10.00%</b></span><extra></extra>"
        )


class TestPriceChart:
    def test_line_with_gap_for_missing_values(self, points):
        fig = create_price_chart(points, "AAPL", "close")
        trace = fig.data[0]

        assert trace.mode == "lines"
        assert trace.name == "AAPL"
        assert trace.connectgaps is False
        assert len(trace.x) == len(points)
        assert sum(1 for y in trace.y if y != y) == 1  # one NaN

    def test_drag_selects_instead_of_zooming(self, points):
        fig = create_price_chart(points, "AAPL", "close")

        assert fig.layout.dragmode == "select"
        assert fig.layout.selectdirection == "h"
        assert fig.layout.title.text == "AAPL Stock Price"
        assert fig.layout.yaxis.title.text == "close"

    def test_readout_annotation_only_while_dragging(self, overlay, points):
        assert len(create_price_chart(points, "AAPL", "close", overlay).layout.annotations) == 0

        apply_selection(overlay, SeriesSurface(points), _selection_event("2024-01-01", "2024-01-05"))
        fig = create_price_chart(points, "AAPL", "close", overlay)

        assert len(fig.layout.annotations) == 1
        assert "10.00%" in fig.layout.annotations[0].text
        assert fig.data[0].hovertemplate.startswith("2024-01-01 - 2024-01-05")

    def test_empty_series_still_renders(self):
        fig = create_price_chart([], "AAPL", "open")

        assert len(fig.data) == 1
        assert len(fig.data[0].x) == 0


class TestValidation:
    def test_warning_when_key_missing(self, monkeypatch):
        import dashboard.utils.validation as validation

        monkeypatch.setattr(validation, "FMP_API_KEY", "")
        monkeypatch.setattr(validation, "_warned", False)

        assert validation.is_fmp_configured() is False
        assert validation.missing_config_warning() == validation.MISSING_KEY_MESSAGE
        assert validation._warned is True

    def test_no_warning_when_key_present(self, monkeypatch):
        import dashboard.utils.validation as validation

        monkeypatch.setattr(validation, "FMP_API_KEY", "abc")

        assert validation.is_fmp_configured() is True
        assert validation.missing_config_warning() is None

    def test_blank_key_counts_as_missing(self):
        from config import is_api_key_configured

        assert is_api_key_configured("   ") is False
        assert is_api_key_configured("abc") is True
