"""Assembles one sensor reading from a device directory.

A read cycle walks the attribute files one at a time: temperature, battery,
then humidity if the device has it. Temperature may come out as NaN; battery
and humidity must parse or the cycle produces nothing.
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import structlog

from shared.schemas import METRICS, MetricKind, SensorReading, device_id_for, metric_path

from .value_reader import read_value

logger = structlog.get_logger()

# Type alias for reading consumers
ReadingHandler = Callable[[SensorReading], Awaitable[None] | None]


class DeviceReader:
    """Runs read cycles and hands complete readings to a consumer."""

    def __init__(self, on_reading: ReadingHandler | None = None) -> None:
        self._on_reading = on_reading

    async def read(self, device_dir: str | Path) -> SensorReading | None:
        """Run one read cycle for a device.

        Args:
            device_dir: Device directory

        Returns:
            The reading, or ``None`` when the cycle was aborted
        """
        device = device_id_for(device_dir)

        temperature = await read_value(device_dir, METRICS[MetricKind.TEMPERATURE].filename)
        if temperature.is_io_failure:
            logger.warning("read_cycle_aborted", device=device, metric="temperature")
            return None

        battery = await read_value(device_dir, METRICS[MetricKind.BATTERY].filename)
        if not battery.is_value:
            logger.warning("read_cycle_aborted", device=device, metric="battery")
            return None

        values: dict[MetricKind, float] = {
            MetricKind.TEMPERATURE: temperature.value if temperature.is_value else float("nan"),
            MetricKind.BATTERY: battery.value,
        }
        if not temperature.is_value:
            logger.warning("temperature_invalid", device=device)

        if await self._has_humidity(device_dir):
            humidity = await read_value(device_dir, METRICS[MetricKind.HUMIDITY].filename)
            if not humidity.is_value:
                logger.warning("read_cycle_aborted", device=device, metric="humidity")
                return None
            values[MetricKind.HUMIDITY] = humidity.value

        return SensorReading(device=device, values=values)

    async def refresh(self, device_dir: str | Path) -> None:
        """Read a device and pass a complete reading to the consumer."""
        device = device_id_for(device_dir)
        try:
            reading = await self.read(device_dir)
            if reading is None or self._on_reading is None:
                return
            result = self._on_reading(reading)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.error("read_cycle_error", device=device, error=str(e))

    async def _has_humidity(self, device_dir: str | Path) -> bool:
        path = metric_path(device_dir, MetricKind.HUMIDITY)
        try:
            return await asyncio.to_thread(path.is_file)
        except OSError as e:
            logger.error("humidity_probe_failed", path=str(path), error=str(e))
            return False
