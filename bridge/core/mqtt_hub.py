"""MQTT messaging hub for sensorbridge.

Owns the single paho-mqtt client shared by discovery and state publishing,
and routes broker connection events back onto the asyncio event loop.
"""

import asyncio
from collections.abc import Awaitable, Callable

import paho.mqtt.client as mqtt
import structlog

from .config import Settings
from .errors import TransportError

logger = structlog.get_logger()

# Type alias for connection handlers
ConnectHandler = Callable[[], Awaitable[None] | None]


class MqttHub:
    """Central MQTT messaging hub.

    paho runs its own network thread and reconnects on its own. Every paho
    callback is marshalled to the event loop before any handler runs, so
    handlers never execute concurrently with the rest of the pipeline.
    """

    def __init__(
        self,
        settings: Settings,
        host: str,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> None:
        """Initialize the MQTT hub.

        Args:
            settings: Application settings
            host: Broker host name or address
            port: Broker port, defaults to ``settings.mqtt_port``
            username: Optional broker username
            password: Optional broker password
        """
        self._settings = settings
        self._host = host
        self._port = port or settings.mqtt_port
        self._username = username
        self._password = password
        self._client: mqtt.Client | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._handlers: list[ConnectHandler] = []
        self._tasks: set[asyncio.Task[None]] = set()
        self._connected = False
        self._running = False

    def on_connected(self, handler: ConnectHandler) -> None:
        """Register a handler run on every successful broker connection."""
        self._handlers.append(handler)

    async def start(self) -> None:
        """Connect to the broker and start the network loop."""
        if self._running:
            return

        logger.info("mqtt_hub_starting", host=self._host, port=self._port)

        self._loop = asyncio.get_running_loop()
        client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=self._settings.client_id,
            protocol=mqtt.MQTTv311,
        )
        if self._username is not None:
            client.username_pw_set(self._username, self._password)
        client.on_connect = self._on_connect
        client.on_disconnect = self._on_disconnect

        try:
            await asyncio.to_thread(
                client.connect, self._host, self._port, self._settings.mqtt_keepalive
            )
        except OSError as e:
            raise TransportError(
                f"cannot connect to {self._host}:{self._port}: {e}"
            ) from e

        client.loop_start()
        self._client = client
        self._running = True

    async def stop(self) -> None:
        """Disconnect from the broker without waiting for queued messages."""
        if not self._running:
            return

        self._running = False
        if self._client:
            try:
                self._client.disconnect()
                self._client.loop_stop()
            except Exception as e:
                logger.warning("mqtt_disconnect_error", error=str(e))
            self._client = None
        self._connected = False

        logger.info("mqtt_hub_stopped")

    def publish(self, topic: str, payload: str, retain: bool = False) -> None:
        """Queue a message for the broker.

        Args:
            topic: Topic to publish to
            payload: Message payload (JSON text)
            retain: Ask the broker to keep the message for new subscribers
        """
        if not self._client:
            raise TransportError("MQTT hub not started")

        info = self._client.publish(
            topic, payload, qos=self._settings.mqtt_qos, retain=retain
        )
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            logger.warning(
                "publish_not_queued",
                topic=topic,
                error=mqtt.error_string(info.rc),
            )
            return

        logger.debug("message_published", topic=topic, retain=retain, payload=payload)

    def _on_connect(self, client, userdata, flags, reason_code, properties=None) -> None:
        """paho connect callback (network thread)."""
        if reason_code.is_failure:
            logger.error("mqtt_connect_refused", reason=str(reason_code))
            return
        if self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._dispatch_connected)

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None) -> None:
        """paho disconnect callback (network thread)."""
        if self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._mark_disconnected, str(reason_code))

    def _mark_disconnected(self, reason: str) -> None:
        self._connected = False
        logger.warning("mqtt_disconnected", reason=reason)

    def _dispatch_connected(self) -> None:
        self._connected = True
        logger.info("mqtt_connected", host=self._host, port=self._port)
        for handler in self._handlers:
            task = asyncio.create_task(self._run_handler(handler))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _run_handler(self, handler: ConnectHandler) -> None:
        """Run a connect handler, logging instead of raising."""
        try:
            result = handler()
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.error("connect_handler_error", error=str(e))

    @property
    def is_running(self) -> bool:
        """Check if the hub is running."""
        return self._running

    @property
    def is_connected(self) -> bool:
        """Check if the broker connection is currently up."""
        return self._connected
