"""Tests for the Response Decoder (model text → DashboardData)."""
import json

import pytest

from core.decoder import (
    SIMULATION_PLACEHOLDER,
    decode_dashboard,
    decode_simulation,
    strip_code_fence,
)
from core.errors import DecodeError
from conftest import DASHBOARD_PAYLOAD


class TestStripCodeFence:

    @pytest.mark.parametrize("raw", [
        '```json\n{"a": 1}\n```',
        '```JSON\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
        '  ```json   \n{"a": 1}\n```  \n',
        '```json{"a": 1}```',
        '{"a": 1}',
    ])
    def test_fence_variants(self, raw):
        """Every supported fence style is removed."""
        assert strip_code_fence(raw) == '{"a": 1}'

    def test_only_outer_fences_removed(self):
        """Backticks inside string values survive."""
        raw = '```json\n{"note": "use ```code``` here"}\n```'
        assert json.loads(strip_code_fence(raw)) == {"note": "use ```code``` here"}


class TestDecodeDashboard:

    def test_fenced_equals_unfenced(self, dashboard_json):
        """Decoding a fenced payload yields the same value as the bare JSON."""
        fenced = f"```json\n{dashboard_json}\n```"
        assert decode_dashboard(fenced) == decode_dashboard(dashboard_json)

    def test_fields_mapped(self, dashboard_json):
        """camelCase payload keys map onto the dataclasses."""
        data = decode_dashboard(dashboard_json)
        assert data.current.aqi == 182
        assert data.current.pm25 == 96.4
        assert data.current.humidity == 61.0
        assert data.current.condition == "Haze"
        assert data.current.location == "New Delhi, India"
        assert data.health_risk.startswith("High risk")
        assert len(data.advisory) == 3
        assert data.climate_insight

    def test_forecast_order_is_preserved(self, dashboard_json):
        """Model order is authoritative; no client-side sort."""
        data = decode_dashboard(dashboard_json)
        assert [p.time for p in data.forecast] == ["12:00", "15:00", "18:00", "21:00"]
        assert [p.aqi for p in data.forecast] == [190, 176, 205, 231]

    def test_float_aqi_is_rounded(self):
        """Fractional AQI values are rounded to integers."""
        data = decode_dashboard('{"current": {"aqi": 151.6}}')
        assert data.current.aqi == 152

    def test_optional_fields_default(self):
        """Missing optional fields get their defaults."""
        data = decode_dashboard('{"current": {"aqi": 80}}')
        assert data.current.pm25 == 0.0
        assert data.current.condition == "Unknown"
        assert data.current.location == ""
        assert data.forecast == []
        assert data.advisory == []
        assert data.health_risk == ""
        assert data.climate_insight == ""

    def test_null_treated_as_missing(self):
        """JSON null behaves like an absent field."""
        data = decode_dashboard('{"current": {"aqi": 80, "temp": null}, "advisory": null}')
        assert data.current.temp == 0.0
        assert data.advisory == []

    @pytest.mark.parametrize("raw", [
        '{"current": {"aqi": 120, "pm25": 4',          # truncated
        "not json at all",
        "",
        "```json\n```",
        "{'current': {'aqi': 1}}",                      # python repr, not JSON
    ])
    def test_invalid_json_raises(self, raw):
        """Text that is not JSON raises DecodeError."""
        with pytest.raises(DecodeError):
            decode_dashboard(raw)

    def test_decode_error_is_value_error(self):
        """DecodeError can be caught as ValueError."""
        with pytest.raises(ValueError):
            decode_dashboard("[")

    @pytest.mark.parametrize("payload", [
        [],
        {"forecast": []},
        {"current": "bad"},
        {"current": {}},
        {"current": {"aqi": "150"}},
        {"current": {"aqi": True}},
        {"current": {"aqi": 100, "temp": "warm"}},
        {"current": {"aqi": 100}, "forecast": {"time": "1", "aqi": 2}},
        {"current": {"aqi": 100}, "forecast": [{"time": "12:00"}]},
        {"current": {"aqi": 100}, "advisory": "wear a mask"},
        {"current": {"aqi": 100}, "advisory": ["ok", 3]},
        {"current": {"aqi": 100}, "healthRisk": ["high"]},
    ])
    def test_schema_mismatch_raises(self, payload):
        """Structurally wrong payloads raise DecodeError."""
        with pytest.raises(DecodeError):
            decode_dashboard(json.dumps(payload))

    @pytest.mark.parametrize("raw", [
        '{"current": {"aqi": NaN}}',
        '{"current": {"aqi": Infinity}}',
        '{"current": {"aqi": -Infinity}}',
        '{"current": {"aqi": 1e400}}',
        '{"current": {"aqi": 1' + "0" * 400 + '}}',
        '{"current": {"aqi": 80, "pm25": NaN}}',
        '{"current": {"aqi": 80}, "forecast": [{"time": "12:00", "aqi": Infinity}]}',
    ])
    def test_non_finite_numbers_raise(self, raw):
        """NaN, infinities and out-of-range numbers are decode errors, not crashes."""
        with pytest.raises(DecodeError):
            decode_dashboard(raw)

    def test_unknown_fields_ignored(self):
        """Extra keys in the payload are ignored."""
        payload = dict(DASHBOARD_PAYLOAD, sources=["https://example.org"])
        assert decode_dashboard(json.dumps(payload)).current.aqi == 182


class TestDecodeSimulation:

    def test_text_passes_through_verbatim(self):
        """Non-blank replies are returned unchanged."""
        reply = "**Short answer:** yes.\n\n```\nnot stripped\n```"
        assert decode_simulation(reply) == reply

    @pytest.mark.parametrize("raw", [None, "", "   \n"])
    def test_blank_gets_placeholder(self, raw):
        """Blank replies get the placeholder text."""
        assert decode_simulation(raw) == SIMULATION_PLACEHOLDER
