"""Shared fixtures for sensorbridge tests."""

import asyncio
from pathlib import Path

import pytest

from bridge.core import Settings


class FakeHub:
    """Records publishes instead of talking to a broker."""

    def __init__(self) -> None:
        self.published: list[tuple[str, str, bool]] = []
        self.handlers = []

    def on_connected(self, handler) -> None:
        self.handlers.append(handler)

    def publish(self, topic: str, payload: str, retain: bool = False) -> None:
        self.published.append((topic, payload, retain))

    async def connect(self) -> None:
        """Simulate a successful broker connection."""
        for handler in self.handlers:
            await handler()

    def topics(self) -> list[str]:
        return [topic for topic, _, _ in self.published]

    def payloads_for(self, topic: str) -> list[str]:
        return [payload for t, payload, _ in self.published if t == topic]


def scripted_changes(*batches):
    """Change source yielding the given batches, then idling until stopped."""

    async def source(paths, stop_event):
        for batch in batches:
            yield batch
        await stop_event.wait()

    return source


async def wait_idle(watcher, timeout: float = 2.0) -> None:
    """Wait until the watcher has no read cycles in flight."""
    await asyncio.sleep(0.05)
    async with asyncio.timeout(timeout):
        while watcher.in_flight:
            await asyncio.sleep(0.01)


@pytest.fixture
def settings():
    """Create test settings."""
    return Settings(client_id="sensorbridge-test", topic_prefix="home/sensor")


@pytest.fixture
def hub():
    return FakeHub()


@pytest.fixture
def make_device(tmp_path):
    """Create a device directory with the given attribute files."""

    def factory(name: str = "room1", **files: str) -> Path:
        device_dir = tmp_path / name
        device_dir.mkdir(exist_ok=True)
        for filename, content in files.items():
            (device_dir / filename).write_text(content, encoding="utf-8")
        return device_dir

    return factory
