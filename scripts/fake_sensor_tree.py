#!/usr/bin/env python3
"""
Simulated sensor tree for testing sensorbridge.

FAKE devices that keep rewriting their attribute files with drifting values,
so a locally running bridge has something to publish.

Usage:
    # Terminal 1: Write readings every 2 seconds
    python scripts/fake_sensor_tree.py /tmp/sensors --devices kitchen bedroom --humidity kitchen

    # Terminal 2: Run the bridge against a local broker
    sensorbridge localhost /tmp/sensors/kitchen /tmp/sensors/bedroom
"""

import argparse
import random
import signal
import time
from pathlib import Path


class FakeSensorTree:
    """Simulated device directories under a common root."""

    def __init__(self, root: Path, devices: list[str], humidity: set[str] | None = None):
        self.root = root
        self.devices = devices
        self.humidity = humidity or set()
        self.running = False
        self.temperature = {name: 21.0 for name in devices}
        self.battery = {name: 3.0 for name in devices}
        self.relative_humidity = {name: 50.0 for name in devices}

    def device_dir(self, name: str) -> Path:
        return self.root / name

    def create(self) -> list[Path]:
        """Create the device directories."""
        dirs = []
        for name in self.devices:
            path = self.device_dir(name)
            path.mkdir(parents=True, exist_ok=True)
            dirs.append(path)
        return dirs

    def write_readings(self) -> None:
        """Drift every value a little and rewrite the attribute files."""
        for name in self.devices:
            path = self.device_dir(name)

            self.temperature[name] += random.uniform(-0.5, 0.5)
            self.temperature[name] = max(15, min(35, self.temperature[name]))
            (path / "value").write_text(f"{self.temperature[name]:.2f}\n")

            # batteries only drain
            self.battery[name] = max(2.0, self.battery[name] - random.uniform(0, 0.001))
            (path / "batt").write_text(f"{self.battery[name]:.3f}\n")

            if name in self.humidity:
                self.relative_humidity[name] += random.uniform(-1, 1)
                self.relative_humidity[name] = max(0, min(100, self.relative_humidity[name]))
                (path / "hum").write_text(f"{self.relative_humidity[name]:.1f}\n")

            print(f"[{name}] temp={self.temperature[name]:.1f}°C batt={self.battery[name]:.3f}V")

    def run(self, interval: float) -> None:
        """Write readings until stopped."""
        self.create()
        self.running = True
        print(f"Writing to {self.root} (Ctrl+C to stop)")

        while self.running:
            self.write_readings()
            time.sleep(interval)

        print("\nStopped")

    def stop(self):
        """Stop writing."""
        self.running = False


def main():
    parser = argparse.ArgumentParser(description="Simulated sensor tree for sensorbridge")
    parser.add_argument("root", type=Path, help="Directory holding the device directories")
    parser.add_argument("--devices", nargs="+", default=["fake-device-01"], help="Device names")
    parser.add_argument("--humidity", nargs="*", default=[], help="Devices that expose humidity")
    parser.add_argument("--interval", type=float, default=2.0, help="Seconds between writes")
    args = parser.parse_args()

    tree = FakeSensorTree(args.root, args.devices, set(args.humidity))

    signal.signal(signal.SIGINT, lambda *_: tree.stop())
    signal.signal(signal.SIGTERM, lambda *_: tree.stop())

    tree.run(args.interval)


if __name__ == "__main__":
    main()
