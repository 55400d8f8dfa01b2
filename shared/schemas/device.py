"""Device and metric definitions for sensorbridge.

A device is one directory in the sensor tree. Each metric it exposes lives in
a plain-text attribute file inside that directory. This module defines the
fixed mapping from metric kind to filename, unit and discovery metadata.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class MetricKind(str, Enum):
    """Metrics a device can expose."""

    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    BATTERY = "battery"


class MetricSpec(BaseModel):
    """Static description of one metric.

    Attributes:
        kind: Metric kind
        filename: Attribute file inside the device directory
        topic_suffix: Appended to the device id in the discovery topic
        state_key: Key used for this metric in the state payload
        label: Human-readable suffix for the entity name
        unit: Unit of measurement announced in discovery
        device_class: Home Assistant device class
        value_template: Template the consumer evaluates against the state payload
        required: Whether a reading can be emitted without this metric
    """

    kind: MetricKind
    filename: str
    topic_suffix: str
    state_key: str
    label: str
    unit: str
    device_class: str
    value_template: str
    required: bool = True

    model_config = {"frozen": True}


METRICS: dict[MetricKind, MetricSpec] = {
    MetricKind.TEMPERATURE: MetricSpec(
        kind=MetricKind.TEMPERATURE,
        filename="value",
        topic_suffix="temp",
        state_key="temperature",
        label="Temperature",
        unit="°C",
        device_class="temperature",
        value_template="{{ value_json.temperature }}",
    ),
    MetricKind.HUMIDITY: MetricSpec(
        kind=MetricKind.HUMIDITY,
        filename="hum",
        topic_suffix="hum",
        state_key="humidity",
        label="Humidity",
        unit="%",
        device_class="humidity",
        value_template="{{ value_json.humidity }}",
        required=False,
    ),
    MetricKind.BATTERY: MetricSpec(
        kind=MetricKind.BATTERY,
        filename="batt",
        topic_suffix="batt",
        state_key="battery_voltage",
        label="Battery",
        unit="%",
        device_class="battery",
        value_template="{{ ((min([value_json.battery_voltage-2.0,1.0]))*100) | round(2) }}",
    ),
}

# State payload and discovery publish order
METRIC_ORDER: tuple[MetricKind, ...] = (
    MetricKind.TEMPERATURE,
    MetricKind.HUMIDITY,
    MetricKind.BATTERY,
)


def device_id_for(device_dir: str | Path) -> str:
    """Return the device id for a watched directory (its base name)."""
    return Path(device_dir).name


def metric_path(device_dir: str | Path, kind: MetricKind) -> Path:
    """Return the attribute file path for a metric of a device."""
    return Path(device_dir) / METRICS[kind].filename
