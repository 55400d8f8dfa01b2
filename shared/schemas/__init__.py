"""Message schemas for sensorbridge."""

from .device import (
    METRIC_ORDER,
    METRICS,
    MetricKind,
    MetricSpec,
    device_id_for,
    metric_path,
)
from .messages import (
    DEFAULT_TOPIC_PREFIX,
    DiscoveryConfig,
    ReadOutcome,
    ReadStatus,
    SensorReading,
    config_topic,
    state_topic,
)

__all__ = [
    # Device schemas
    "MetricKind",
    "MetricSpec",
    "METRICS",
    "METRIC_ORDER",
    "device_id_for",
    "metric_path",
    # Message schemas
    "DEFAULT_TOPIC_PREFIX",
    "DiscoveryConfig",
    "ReadOutcome",
    "ReadStatus",
    "SensorReading",
    "config_topic",
    "state_topic",
]
