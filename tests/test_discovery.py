"""Tests for discovery and state publishing."""

import json
import math
from pathlib import Path

import pytest

from bridge.core.errors import DiscoveryProbeError
from bridge.ingest.discovery import DiscoveryPublisher, has_metric_file
from bridge.ingest.state import StatePublisher
from shared.schemas import MetricKind, SensorReading


@pytest.fixture
def failing_humidity_probe(monkeypatch):
    """Make probing for a humidity file raise like an unreadable directory."""
    original = Path.is_file

    def is_file(self):
        if self.name == "hum":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self)

    monkeypatch.setattr(Path, "is_file", is_file)


class TestHasMetricFile:
    def test_present_and_absent(self, make_device):
        device_dir = make_device(hum="55")
        assert has_metric_file(device_dir, MetricKind.HUMIDITY) is True
        assert has_metric_file(device_dir, MetricKind.BATTERY) is False

    def test_probe_failure_raises(self, make_device, failing_humidity_probe):
        with pytest.raises(DiscoveryProbeError):
            has_metric_file(make_device(), MetricKind.HUMIDITY)


class TestDiscoveryPublisher:
    def test_without_humidity(self, hub, make_device):
        device_dir = make_device("room1", value="21.5", batt="2.9")

        count = DiscoveryPublisher(hub).publish_all([device_dir])

        assert count == 2
        assert hub.topics() == [
            "home/sensor/room1temp/config",
            "home/sensor/room1batt/config",
        ]
        assert all(retain for _, _, retain in hub.published)

    def test_with_humidity(self, hub, make_device):
        device_dir = make_device("room1", value="21.5", batt="2.9", hum="55")

        DiscoveryPublisher(hub).publish_all([device_dir])

        assert hub.topics() == [
            "home/sensor/room1temp/config",
            "home/sensor/room1hum/config",
            "home/sensor/room1batt/config",
        ]
        payload = json.loads(hub.payloads_for("home/sensor/room1hum/config")[0])
        assert payload["object_id"] == "room1_humidity"
        assert payload["device_class"] == "humidity"
        assert payload["state_topic"] == "home/sensor/room1/state"
        assert "topic" not in payload

    def test_battery_payload(self, hub, make_device):
        device_dir = make_device("kitchen", value="20", batt="3.0")

        DiscoveryPublisher(hub).publish_all([device_dir])

        payload = json.loads(hub.payloads_for("home/sensor/kitchenbatt/config")[0])
        assert payload["object_id"] == "kitchen_battery"
        assert payload["state_topic"] == "home/sensor/kitchen/state"
        assert payload["unit_of_measurement"] == "%"

    def test_config_published_even_without_files(self, hub, make_device):
        device_dir = make_device("empty")

        assert DiscoveryPublisher(hub).publish_all([device_dir]) == 2

    def test_multiple_devices_in_order(self, hub, make_device):
        dirs = [make_device("b", hum="1"), make_device("a")]

        DiscoveryPublisher(hub).publish_all(dirs)

        assert hub.topics() == [
            "home/sensor/btemp/config",
            "home/sensor/bhum/config",
            "home/sensor/bbatt/config",
            "home/sensor/atemp/config",
            "home/sensor/abatt/config",
        ]

    def test_probe_failure_skips_only_humidity(self, hub, make_device, failing_humidity_probe):
        dirs = [make_device("room1", hum="55"), make_device("room2", hum="40")]

        count = DiscoveryPublisher(hub).publish_all(dirs)

        assert count == 4
        assert hub.topics() == [
            "home/sensor/room1temp/config",
            "home/sensor/room1batt/config",
            "home/sensor/room2temp/config",
            "home/sensor/room2batt/config",
        ]

    def test_custom_prefix(self, hub, make_device):
        DiscoveryPublisher(hub, "ha/sensor").publish_all([make_device("room1")])
        assert hub.topics()[0] == "ha/sensor/room1temp/config"


class TestStatePublisher:
    def test_publishes_not_retained(self, hub):
        reading = SensorReading(
            device="room1",
            values={MetricKind.TEMPERATURE: 21.5, MetricKind.BATTERY: 2.9},
        )

        StatePublisher(hub).publish(reading)

        assert hub.published == [
            ("home/sensor/room1/state", '{"temperature":21.5,"battery_voltage":2.9}', False)
        ]

    def test_publishes_invalid_temperature(self, hub):
        reading = SensorReading(
            device="room1",
            values={MetricKind.TEMPERATURE: math.nan, MetricKind.BATTERY: 2.9},
        )

        StatePublisher(hub).publish(reading)

        topic, payload, retain = hub.published[0]
        assert json.loads(payload) == {"temperature": None, "battery_voltage": 2.9}
        assert retain is False
