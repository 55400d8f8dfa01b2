"""Reads a single attribute file of a device.

Failures never raise: they come back as a ``ReadOutcome`` and are logged here
with the file path, so callers only decide whether to continue.
"""

import asyncio
import math
from pathlib import Path

import structlog

from shared.schemas import ReadOutcome

logger = structlog.get_logger()


def parse_value(text: str) -> float | None:
    """Parse attribute file content, returning ``None`` if it is not a finite number."""
    stripped = text.strip()
    if not stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


async def read_value(device_dir: str | Path, filename: str) -> ReadOutcome:
    """Read and parse one attribute file off the event loop.

    Args:
        device_dir: Device directory
        filename: Attribute file name inside the directory

    Returns:
        The parsed value or the failure class
    """
    path = Path(device_dir) / filename
    try:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError) as e:
        logger.error("attribute_file_missing", path=str(path), error=str(e))
        return ReadOutcome.missing(str(e))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("attribute_file_unreadable", path=str(path), error=str(e))
        return ReadOutcome.unreadable(str(e))

    value = parse_value(text)
    if value is None:
        logger.error("attribute_not_a_number", path=str(path), content=text[:32])
        return ReadOutcome.not_a_number(f"{path} is not a number")

    return ReadOutcome.of(value)
