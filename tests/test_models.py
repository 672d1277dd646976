"""
Tests for tracker options, the event envelope and tracking results.
"""

import json
from datetime import datetime, timedelta, timezone

from aptabase.models import (
    ClientConfig,
    EventEnvelope,
    SystemProps,
    TrackerOptions,
    TrackResult,
    TrackStatus,
    format_timestamp,
)
from aptabase.regions import Endpoint, Region


def _system_props(**overrides):
    values = dict(is_debug=False, locale="en-US", app_version="1.0.0", sdk_version="aptabase-python@0.1.0")
    values.update(overrides)
    return SystemProps(**values)


class TestTrackerOptions:
    """Test option parsing."""

    def test_from_dict_snake_case(self):
        options = TrackerOptions.from_dict({"host": "https://x.example", "app_version": "1.0"})
        assert options == TrackerOptions(host="https://x.example", app_version="1.0")

    def test_from_dict_camel_case(self):
        options = TrackerOptions.from_dict({"appVersion": "2.0"})
        assert options.host is None
        assert options.app_version == "2.0"


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig("A-US-1", Endpoint(Region.US, "https://us.aptabase.com"))
        assert config.event_url == "https://us.aptabase.com/api/v0/event"
        assert config.app_version == ""


class TestEventEnvelope:
    """Test the wire format of events."""

    def test_json_body_uses_wire_names(self):
        """Test field names and nesting of the JSON body."""
        now = datetime(2025, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
        envelope = EventEnvelope.create("app_started", _system_props(), {"plan": "pro", "seats": 3}, now=now)

        assert json.loads(envelope.to_json()) == {
            "timestamp": "2025-01-02T03:04:05.678Z",
            "sessionId": "CHANGE-THIS",
            "eventName": "app_started",
            "systemProps": {
                "isDebug": False,
                "locale": "en-US",
                "appVersion": "1.0.0",
                "sdkVersion": "aptabase-python@0.1.0",
            },
            "props": {"plan": "pro", "seats": 3},
        }

    def test_to_json_keeps_null_locale_and_drops_missing_props(self):
        envelope = EventEnvelope.create("app_started", _system_props(locale=None))
        body = json.loads(envelope.to_json())

        assert "props" not in body
        assert body["systemProps"]["locale"] is None

    def test_empty_props_are_sent(self):
        """An explicitly empty mapping is still part of the body."""
        envelope = EventEnvelope.create("app_started", _system_props(), {})
        assert json.loads(envelope.to_json())["props"] == {}

    def test_bool_props_stay_bool(self):
        envelope = EventEnvelope.create("toggle", _system_props(), {"on": True, "ratio": 0.5})
        assert json.loads(envelope.to_json())["props"] == {"on": True, "ratio": 0.5}

    def test_props_are_copied(self):
        """Later changes to the caller's mapping do not leak into the envelope."""
        props = {"n": 1}
        envelope = EventEnvelope.create("e", _system_props(), props)
        props["n"] = 2
        assert envelope.props == {"n": 1}


class TestFormatTimestamp:
    def test_converts_to_utc(self):
        dt = datetime(2025, 1, 1, 8, 0, 0, tzinfo=timezone(timedelta(hours=8)))
        assert format_timestamp(dt) == "2025-01-01T00:00:00.000Z"

    def test_naive_datetime_is_utc(self):
        assert format_timestamp(datetime(2025, 1, 1)) == "2025-01-01T00:00:00.000Z"


class TestTrackResult:
    def test_sent(self):
        assert TrackResult(TrackStatus.SENT, "e", status_code=200).sent
        assert not TrackResult(TrackStatus.DELIVERY_ERROR, "e", status_code=500).sent

