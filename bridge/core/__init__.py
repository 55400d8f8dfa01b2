"""Core components for sensorbridge."""

from .config import Settings, get_settings
from .errors import DiscoveryProbeError, SensorBridgeError, TransportError
from .log import configure_logging
from .mqtt_hub import MqttHub

__all__ = [
    "MqttHub",
    "Settings",
    "get_settings",
    "configure_logging",
    "SensorBridgeError",
    "TransportError",
    "DiscoveryProbeError",
]
