#!/usr/bin/env python3
"""sensorbridge CLI - Publish a filesystem sensor tree to MQTT.

Usage:
    sensorbridge <BROKER_ADDRESS> [-username <USER>] [-password <PASS>] dir1 [dirN ...]

Flags may be interleaved with the device directories.
"""

import asyncio
import sys
from pathlib import Path

import click

from bridge.core import configure_logging, get_settings
from bridge.main import parse_broker_address, run_bridge


@click.command(context_settings={"help_option_names": ["--help"]})
@click.argument("broker")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("-username", "-user", "username", default=None, help="Broker username")
@click.option("-password", "-pass", "password", default=None, help="Broker password")
@click.option("--log-level", default=None, help="Logging level (overrides settings)")
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"]),
    default=None,
    help="Log format (overrides settings)",
)
def cli(
    broker: str,
    paths: tuple[Path, ...],
    username: str | None,
    password: str | None,
    log_level: str | None,
    log_format: str | None,
) -> None:
    """Watch sensor directories and publish them to the MQTT broker at BROKER."""
    settings = get_settings()
    update = {}
    if log_level:
        update["log_level"] = log_level
    if log_format:
        update["log_format"] = log_format
    if update:
        settings = settings.model_copy(update=update)

    try:
        host, port = parse_broker_address(broker, settings.mqtt_port)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="BROKER") from e

    configure_logging(settings.log_level, settings.log_format)

    status = asyncio.run(
        run_bridge(
            settings,
            host,
            port,
            paths,
            username=username,
            password=password,
        )
    )
    sys.exit(status)


if __name__ == "__main__":
    cli()
