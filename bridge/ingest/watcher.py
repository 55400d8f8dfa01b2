"""Filesystem watcher for device directories.

Emits a read trigger for every watched device once the notify watcher is in
place, then one trigger per changed attribute file for the device that owns
it. Triggers are independent tasks and nothing is cancelled.

watchfiles reports changes in batches of ``(change, path)`` sets, so writes to
one file that land within the same batch window still arrive as one event.
The window is kept short (``debounce_ms``/``step_ms``, see ``Settings``).
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from pathlib import Path

import structlog
from watchfiles import Change, awatch

logger = structlog.get_logger()

# Type alias for per-device triggers
DeviceHandler = Callable[[Path], Awaitable[None]]
ChangeBatch = set[tuple[Change, str]]
ChangeSource = Callable[[Sequence[Path], asyncio.Event], AsyncIterator[ChangeBatch]]


DEFAULT_DEBOUNCE_MS = 5
DEFAULT_STEP_MS = 5


def watch_changes(
    paths: Sequence[Path],
    stop_event: asyncio.Event,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    step_ms: int = DEFAULT_STEP_MS,
) -> AsyncIterator[ChangeBatch]:
    """Default change source backed by watchfiles.

    watchfiles groups changes for up to 1.6s by default; the short window here
    keeps successive writes to a file in separate batches.
    """
    return awatch(*paths, stop_event=stop_event, debounce=debounce_ms, step=step_ms)


class SensorWatcher:
    """Watches a fixed set of device directories."""

    def __init__(
        self,
        watch_set: Sequence[str | Path],
        on_device: DeviceHandler,
        changes: ChangeSource = watch_changes,
    ) -> None:
        """Initialize the watcher.

        Args:
            watch_set: Device directories, in startup order
            on_device: Coroutine run for each device that needs a read cycle
            changes: Factory for the stream of change batches
        """
        self._watch_set = tuple(Path(p) for p in watch_set)
        self._devices = {p.resolve(): p for p in self._watch_set}
        self._on_device = on_device
        self._changes = changes
        self._stop = asyncio.Event()
        self._task: asyncio.Task[None] | None = None
        self._cycles: set[asyncio.Task[None]] = set()

    async def start(self) -> None:
        """Start watching in a background task."""
        if self._task is not None:
            return
        self._stop.clear()
        self._task = asyncio.create_task(self.run(), name="sensor_watcher")

    async def stop(self) -> None:
        """Stop watching. In-flight read cycles are left to finish on their own."""
        self._stop.set()
        if self._task:
            await self._task
            self._task = None

    async def run(self) -> None:
        """Fire the ready pass, then react to changes until stopped.

        The change source is started before the ready pass so that a write
        racing the initial reads is still reported as a change.
        """
        logger.info("watcher_started", devices=[str(p) for p in self._watch_set])
        changes = aiter(self._changes(self._watch_set, self._stop))
        # awatch sets up its notify watcher on the first step of __anext__
        pending = asyncio.ensure_future(anext(changes, None))
        await asyncio.sleep(0)
        self._on_ready()

        try:
            batch = await pending
            while batch is not None:
                for change, path in sorted(batch, key=lambda c: c[1]):
                    self._on_change(change, Path(path))
                batch = await anext(changes, None)
        except Exception as e:
            logger.error("watcher_failed", error=str(e))
            return

        logger.info("watcher_stopped")

    def _on_ready(self) -> None:
        for device_dir in self._watch_set:
            self._trigger(device_dir)

    def _on_change(self, change: Change, path: Path) -> None:
        if change == Change.deleted:
            return

        device_dir = self._devices.get(path.parent.resolve())
        if device_dir is None:
            logger.debug("change_ignored", path=str(path))
            return

        logger.info("file_updated", path=str(path))
        self._trigger(device_dir)

    def _trigger(self, device_dir: Path) -> None:
        task = asyncio.create_task(self._on_device(device_dir))
        self._cycles.add(task)
        task.add_done_callback(self._cycles.discard)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def in_flight(self) -> int:
        """Number of read cycles that have not finished yet."""
        return len(self._cycles)
