"""Exceptions raised by sensorbridge.

Per-file read failures are not exceptions; they travel as
``shared.schemas.ReadOutcome`` values.
"""


class SensorBridgeError(Exception):
    """Base class for sensorbridge errors."""


class TransportError(SensorBridgeError):
    """The MQTT transport cannot accept a publish or a connection."""


class DiscoveryProbeError(SensorBridgeError):
    """Checking a device directory for an optional metric file failed."""
