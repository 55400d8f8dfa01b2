"""Message type definitions for sensorbridge.

This module defines the Pydantic models that flow through the ingestion
pipeline: the outcome of reading one attribute file, the assembled sensor
reading published on the state topic, and the retained discovery
configuration published once per metric.
"""

import json
import math
from enum import Enum
from typing import Self

from pydantic import BaseModel, Field, model_validator

from .device import METRIC_ORDER, METRICS, MetricKind

DEFAULT_TOPIC_PREFIX = "home/sensor"


def state_topic(device: str, topic_prefix: str = DEFAULT_TOPIC_PREFIX) -> str:
    """Topic carrying the live state of a device."""
    return f"{topic_prefix}/{device}/state"


def config_topic(device: str, kind: MetricKind, topic_prefix: str = DEFAULT_TOPIC_PREFIX) -> str:
    """Retained discovery topic for one metric of a device."""
    return f"{topic_prefix}/{device}{METRICS[kind].topic_suffix}/config"


class ReadStatus(str, Enum):
    """Result classes of reading a single attribute file."""

    VALUE = "value"
    MISSING_FILE = "missing_file"
    UNREADABLE_FILE = "unreadable_file"
    NOT_A_NUMBER = "not_a_number"


class ReadOutcome(BaseModel):
    """Outcome of reading and parsing one attribute file.

    Attributes:
        status: Result class
        value: Parsed value, set only for ``ReadStatus.VALUE``
        cause: Human-readable failure cause
    """

    status: ReadStatus
    value: float | None = None
    cause: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def of(cls, value: float) -> Self:
        return cls(status=ReadStatus.VALUE, value=value)

    @classmethod
    def missing(cls, cause: str) -> Self:
        return cls(status=ReadStatus.MISSING_FILE, cause=cause)

    @classmethod
    def unreadable(cls, cause: str) -> Self:
        return cls(status=ReadStatus.UNREADABLE_FILE, cause=cause)

    @classmethod
    def not_a_number(cls, cause: str) -> Self:
        return cls(status=ReadStatus.NOT_A_NUMBER, cause=cause)

    @property
    def is_value(self) -> bool:
        return self.status == ReadStatus.VALUE

    @property
    def is_io_failure(self) -> bool:
        """True when the file could not be read at all."""
        return self.status in (ReadStatus.MISSING_FILE, ReadStatus.UNREADABLE_FILE)


def _json_number(value: float) -> float | int | None:
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value

class SensorReading(BaseModel):
    """One complete reading of a device.

    Temperature and battery are always present. Humidity is present only for
    devices that expose a humidity file. Temperature may be NaN when its file
    held something unparseable.

    Attributes:
        device: Device identifier (directory base name)
        values: Metric values keyed by kind
    """

    device: str
    values: dict[MetricKind, float]

    @model_validator(mode="after")
    def _check_required_metrics(self) -> Self:
        missing = [
            kind.value
            for kind in METRIC_ORDER
            if METRICS[kind].required and kind not in self.values
        ]
        if missing:
            raise ValueError(f"reading for {self.device} lacks {', '.join(missing)}")
        return self

    @property
    def temperature(self) -> float:
        return self.values[MetricKind.TEMPERATURE]

    @property
    def battery_voltage(self) -> float:
        return self.values[MetricKind.BATTERY]

    @property
    def humidity(self) -> float | None:
        return self.values.get(MetricKind.HUMIDITY)

    def state_payload(self) -> dict[str, float | int | None]:
        """Build the state payload in temperature, humidity, battery order.

        Non-finite values are mapped to ``None`` so the payload stays valid JSON.
        Integral values are written as integers (``55``, not ``55.0``).
        """
        payload: dict[str, float | int | None] = {}
        for kind in METRIC_ORDER:
            if kind not in self.values:
                continue
            payload[METRICS[kind].state_key] = _json_number(self.values[kind])
        return payload

    def to_state_json(self) -> str:
        """Serialize the state payload to compact JSON."""
        return json.dumps(self.state_payload(), separators=(",", ":"))


class DiscoveryConfig(BaseModel):
    """Retained Home Assistant discovery payload for one metric of a device.

    ``topic`` is where the payload is published and is not part of the payload.
    """

    topic: str = Field(exclude=True)
    object_id: str
    unique_id: str
    name: str
    device_class: str
    state_class: str = "measurement"
    state_topic: str
    unit_of_measurement: str
    value_template: str

    model_config = {"frozen": True}

    @classmethod
    def for_metric(
        cls,
        device: str,
        kind: MetricKind,
        topic_prefix: str = DEFAULT_TOPIC_PREFIX,
    ) -> Self:
        """Derive the discovery config for a device metric."""
        spec = METRICS[kind]
        object_id = f"{device}_{kind.value}"
        return cls(
            topic=config_topic(device, kind, topic_prefix),
            object_id=object_id,
            unique_id=object_id,
            name=f"{device} {spec.label}",
            device_class=spec.device_class,
            state_topic=state_topic(device, topic_prefix),
            unit_of_measurement=spec.unit,
            value_template=spec.value_template,
        )

    def to_json(self) -> str:
        """Serialize the payload (without ``topic``) to JSON."""
        return self.model_dump_json()
