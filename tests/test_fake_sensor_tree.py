"""Tests for the simulated sensor tree script."""

import sys
from pathlib import Path

from bridge.ingest.device_reader import DeviceReader

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "scripts"))

from fake_sensor_tree import FakeSensorTree  # noqa: E402


class TestFakeSensorTree:
    async def test_written_files_are_readable(self, tmp_path):
        tree = FakeSensorTree(tmp_path, ["kitchen", "bedroom"], humidity={"kitchen"})
        kitchen, bedroom = tree.create()

        tree.write_readings()

        kitchen_reading = await DeviceReader().read(kitchen)
        bedroom_reading = await DeviceReader().read(bedroom)
        assert kitchen_reading.humidity is not None
        assert bedroom_reading.humidity is None
        assert 15 <= bedroom_reading.temperature <= 35
        assert 2.0 <= bedroom_reading.battery_voltage <= 3.0

    def test_stop(self, tmp_path):
        tree = FakeSensorTree(tmp_path, ["kitchen"])
        tree.running = True
        tree.stop()
        assert tree.running is False
