"""Home Assistant discovery publishing.

Each watched device gets one retained config message per metric it exposes.
Humidity is announced only if the device has a humidity file when discovery
runs; it is not re-checked afterwards.
"""

from collections.abc import Sequence
from pathlib import Path

import structlog

from shared.schemas import (
    DEFAULT_TOPIC_PREFIX,
    METRIC_ORDER,
    METRICS,
    DiscoveryConfig,
    MetricKind,
    device_id_for,
    metric_path,
)

from ..core.errors import DiscoveryProbeError
from ..core.mqtt_hub import MqttHub

logger = structlog.get_logger()


def has_metric_file(device_dir: str | Path, kind: MetricKind) -> bool:
    """Check synchronously whether a device exposes a metric file.

    Raises:
        DiscoveryProbeError: The directory could not be inspected
    """
    path = metric_path(device_dir, kind)
    try:
        return path.is_file()
    except OSError as e:
        raise DiscoveryProbeError(f"cannot probe {path}: {e}") from e


class DiscoveryPublisher:
    """Publishes retained discovery configs for a set of devices."""

    def __init__(self, hub: MqttHub, topic_prefix: str = DEFAULT_TOPIC_PREFIX) -> None:
        self._hub = hub
        self._topic_prefix = topic_prefix

    def configs_for(self, device_dir: str | Path) -> list[DiscoveryConfig]:
        """Build the discovery configs for one device.

        Required metrics are always included; optional ones only when their
        file exists. A failed probe skips that metric and is logged.
        """
        device = device_id_for(device_dir)
        configs = []
        for kind in METRIC_ORDER:
            if not METRICS[kind].required:
                try:
                    if not has_metric_file(device_dir, kind):
                        continue
                except DiscoveryProbeError as e:
                    logger.error("discovery_probe_failed", device=device, metric=kind.value, error=str(e))
                    continue
            configs.append(DiscoveryConfig.for_metric(device, kind, self._topic_prefix))
        return configs

    def publish_all(self, watch_set: Sequence[str | Path]) -> int:
        """Publish configs for every device.

        Returns:
            Number of config messages published
        """
        count = 0
        for device_dir in watch_set:
            configs = self.configs_for(device_dir)
            logger.info(
                "discovery_publishing",
                device=device_id_for(device_dir),
                metrics=[c.object_id for c in configs],
            )
            for config in configs:
                self._hub.publish(config.topic, config.to_json(), retain=True)
                count += 1
        return count
