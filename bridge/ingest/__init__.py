"""Sensor ingestion pipeline for sensorbridge."""

from .device_reader import DeviceReader
from .discovery import DiscoveryPublisher, has_metric_file
from .orchestrator import IngestionOrchestrator
from .state import StatePublisher
from .value_reader import parse_value, read_value
from .watcher import SensorWatcher

__all__ = [
    "DeviceReader",
    "DiscoveryPublisher",
    "IngestionOrchestrator",
    "SensorWatcher",
    "StatePublisher",
    "has_metric_file",
    "parse_value",
    "read_value",
]
