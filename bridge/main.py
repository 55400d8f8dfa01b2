"""Process lifecycle for sensorbridge.

Builds the hub and orchestrator, runs until SIGINT/SIGTERM, then closes the
broker connection without waiting for in-flight read cycles.
"""

import asyncio
import signal
from collections.abc import Sequence
from pathlib import Path

import structlog

from .core import MqttHub, Settings, TransportError
from .ingest import IngestionOrchestrator

logger = structlog.get_logger()


def parse_broker_address(address: str, default_port: int) -> tuple[str, int]:
    """Split ``host``, ``host:port`` or ``mqtt://host:port`` into host and port.

    Raises:
        ValueError: The port is not a number or the host is empty
    """
    if "://" in address:
        address = address.split("://", 1)[1]
    address = address.rstrip("/")

    host, sep, port = address.rpartition(":")
    if not sep or host.endswith(":") or "]" in port:
        # no port, or a bare IPv6 literal
        host, port = address, ""
    host = host.strip("[]")
    if not host:
        raise ValueError(f"invalid broker address: {address!r}")
    if not port:
        return host, default_port
    if not port.isdigit():
        raise ValueError(f"invalid broker port: {port!r}")
    return host, int(port)


async def run_bridge(
    settings: Settings,
    host: str,
    port: int,
    watch_set: Sequence[Path],
    username: str | None = None,
    password: str | None = None,
    stop: asyncio.Event | None = None,
) -> int:
    """Run the bridge until interrupted or until ``stop`` is set.

    Returns:
        Process exit status
    """
    hub = MqttHub(settings, host, port, username=username, password=password)
    orchestrator = IngestionOrchestrator(hub, watch_set, settings)
    orchestrator.attach()

    if stop is None:
        stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    logger.info(
        "bridge_starting",
        broker=f"{host}:{port}",
        devices=[str(p) for p in watch_set],
    )

    try:
        try:
            await hub.start()
        except TransportError as e:
            logger.error("broker_unreachable", error=str(e))
            return 1

        await stop.wait()

        logger.info("bridge_stopping")
        await hub.stop()
        await orchestrator.stop()
        return 0
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)
