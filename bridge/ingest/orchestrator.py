"""Wires the ingestion pipeline to the broker connection.

On the first successful connection the orchestrator publishes discovery and
attaches the watcher (watcher → device reader → state publisher). Later
connections, such as paho reconnects, leave the wiring alone: attaching a
second watcher would publish every reading twice.
"""

from collections.abc import Sequence
from functools import partial
from pathlib import Path

import structlog

from ..core.config import Settings
from ..core.mqtt_hub import MqttHub
from .device_reader import DeviceReader
from .discovery import DiscoveryPublisher
from .state import StatePublisher
from .watcher import ChangeSource, SensorWatcher, watch_changes

logger = structlog.get_logger()


class IngestionOrchestrator:
    """Owns the one-shot wiring of discovery and the watcher."""

    def __init__(
        self,
        hub: MqttHub,
        watch_set: Sequence[str | Path],
        settings: Settings,
        changes: ChangeSource | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            hub: MQTT hub shared by discovery and state publishing
            watch_set: Device directories, fixed for the process lifetime
            settings: Application settings
            changes: Change source handed to the watcher, defaults to
                watchfiles with the batch window from settings
        """
        self._hub = hub
        self._watch_set = tuple(watch_set)
        self._discovery = DiscoveryPublisher(hub, settings.topic_prefix)
        self._state = StatePublisher(hub, settings.topic_prefix)
        self._reader = DeviceReader(on_reading=self._state.publish)
        if changes is None:
            changes = partial(
                watch_changes,
                debounce_ms=settings.watch_debounce_ms,
                step_ms=settings.watch_step_ms,
            )
        self._changes = changes
        self._watcher: SensorWatcher | None = None
        self._watching = False

    def attach(self) -> None:
        """Register with the hub so wiring happens on connect."""
        self._hub.on_connected(self.on_connected)

    async def on_connected(self) -> None:
        """Handle a broker connection."""
        if self._watching:
            logger.info("already_watching", devices=len(self._watch_set))
            return
        self._watching = True

        published = self._discovery.publish_all(self._watch_set)
        logger.info("discovery_published", messages=published)

        self._watcher = SensorWatcher(
            self._watch_set, self._reader.refresh, changes=self._changes
        )
        await self._watcher.start()

    async def stop(self) -> None:
        """Stop the watcher if it was attached."""
        if self._watcher:
            await self._watcher.stop()

    @property
    def watching(self) -> bool:
        """True once discovery and the watcher have been wired."""
        return self._watching

    @property
    def watcher(self) -> SensorWatcher | None:
        return self._watcher
