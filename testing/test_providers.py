"""
Tests for the FMP historical price provider.

No network: a fake session stands in for requests.

Usage:
    pytest testing/test_providers.py -v
"""

import sys
from pathlib import Path

import pytest
import requests

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from core.exceptions import FetchError
from core.providers import FMPProvider, FetchResult, create_default_provider

API_KEY = "test-key-123"
BODY = {
    "symbol": "AAPL",
    "historical": [
        {"date": "2024-02-06", "open": 186.86, "close": 189.30},
        {"date": "2024-02-05", "open": 188.15, "close": 187.68},
    ],
}


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=None):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(
                f"{self.status_code} Client Error for url: https://example.test/?apikey={API_KEY}"
            )

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class _FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


def _make_provider(session) -> FMPProvider:
    return FMPProvider(api_key=API_KEY, base_url="https://example.test/api/v3/", timeout=3, session=session)


class TestRequest:
    def test_builds_url_and_params(self):
        session = _FakeSession(_FakeResponse(payload=BODY))
        _make_provider(session).fetch(" aapl ", "2024-02-03")

        call = session.calls[0]
        assert call["url"] == "https://example.test/api/v3/historical-price-full/AAPL"
        assert call["params"] == {"apikey": API_KEY, "from": "2024-02-03"}
        assert call["timeout"] == 3

    def test_from_date_is_optional(self):
        session = _FakeSession(_FakeResponse(payload=BODY))
        _make_provider(session).fetch("AAPL")

        assert session.calls[0]["params"] == {"apikey": API_KEY}

    def test_single_request_per_fetch(self):
        session = _FakeSession(exc=requests.ConnectionError("down"))
        _make_provider(session).fetch("AAPL")

        assert len(session.calls) == 1


class TestResults:
    def test_success_returns_body(self):
        result = _make_provider(_FakeSession(_FakeResponse(payload=BODY))).fetch("AAPL")

        assert result.ok
        assert result.raw == BODY
        assert result.error is None

    def test_empty_object_is_not_an_error(self):
        result = _make_provider(_FakeSession(_FakeResponse(payload={}))).fetch("AAPL")

        assert result.ok
        assert result.raw == {}

    @pytest.mark.parametrize(
        "session",
        [
            _FakeSession(exc=requests.ConnectionError("connection refused")),
            _FakeSession(exc=requests.Timeout("timed out")),
            _FakeSession(_FakeResponse(status_code=401, payload={"Error Message": "Invalid API KEY"})),
            _FakeSession(_FakeResponse(json_error=ValueError("Expecting value"))),
            _FakeSession(_FakeResponse(payload=["not", "an", "object"])),
        ],
        ids=["connection", "timeout", "http-401", "bad-json", "not-an-object"],
    )
    def test_failures_become_fetch_errors(self, session):
        result = _make_provider(session).fetch("AAPL")

        assert not result.ok
        assert result.raw is None
        assert isinstance(result.error, FetchError)

    def test_cause_is_kept(self):
        cause = requests.ConnectionError("connection refused")
        result = _make_provider(_FakeSession(exc=cause)).fetch("AAPL")

        assert result.error.cause is cause
        assert "connection refused" in str(result.error)

    def test_api_key_is_redacted_in_logs(self):
        from loguru import logger

        messages = []
        sink_id = logger.add(messages.append, level="ERROR", format="{message}")
        try:
            _make_provider(_FakeSession(_FakeResponse(status_code=403))).fetch("AAPL")
        finally:
            logger.remove(sink_id)

        assert messages
        assert all(API_KEY not in m for m in messages)
        assert any("***" in m for m in messages)


def test_fetch_result_ok_flag():
    assert FetchResult(raw={}).ok
    assert not FetchResult(error=FetchError("boom")).ok


def test_fetch_result_holds_exactly_one_outcome():
    with pytest.raises(ValueError):
        FetchResult()
    with pytest.raises(ValueError):
        FetchResult(raw={}, error=FetchError("boom"))


def test_default_provider_is_configured_from_config(monkeypatch):
    import core.providers as providers

    monkeypatch.setattr(providers, "FMP_API_KEY", "from-env")
    monkeypatch.setattr(providers, "FMP_BASE_URL", "https://fmp.test/api/v3")
    monkeypatch.setattr(providers, "REQUEST_TIMEOUT_SECONDS", 7.0)

    provider = create_default_provider()

    assert isinstance(provider, FMPProvider)
    assert provider.api_key == "from-env"
    assert provider.base_url == "https://fmp.test/api/v3"
    assert provider.timeout == 7.0
    assert provider.get_name() == "fmp"
