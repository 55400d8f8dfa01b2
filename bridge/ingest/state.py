"""State publishing for complete sensor readings."""

import structlog

from shared.schemas import DEFAULT_TOPIC_PREFIX, SensorReading, state_topic

from ..core.mqtt_hub import MqttHub

logger = structlog.get_logger()


class StatePublisher:
    """Publishes readings to the device state topic.

    State is never retained; only discovery configs are.
    """

    def __init__(self, hub: MqttHub, topic_prefix: str = DEFAULT_TOPIC_PREFIX) -> None:
        self._hub = hub
        self._topic_prefix = topic_prefix

    def publish(self, reading: SensorReading) -> None:
        topic = state_topic(reading.device, self._topic_prefix)
        payload = reading.to_state_json()
        logger.info("state_publishing", device=reading.device, topic=topic, payload=payload)
        self._hub.publish(topic, payload, retain=False)
