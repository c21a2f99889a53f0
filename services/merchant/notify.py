"""Session notifications — log every trade notice and broadcast it."""

import asyncio
import logging

from tradepost import (
    LogLevel,
    MessageType,
    Notification,
    SessionBusClient,
    Topics,
    create_message,
)

logger = logging.getLogger(__name__)


class Notifier:
    """Fire-and-forget notices for the whole session.

    With a bus attached, each notice is published on
    `/session/notifications` in the background; `flush()` waits for the
    outstanding publishes.
    """

    AGENT_ID = "merchant"

    def __init__(self, bus: SessionBusClient | None = None) -> None:
        self._bus = bus
        self._pending: set[asyncio.Task[None]] = set()

    def info(self, text: str) -> None:
        logger.info(text)
        self._send(Notification(level=LogLevel.INFO, text=text))

    def error(self, text: str) -> None:
        logger.error(text)
        self._send(Notification(level=LogLevel.ERROR, text=text))

    async def flush(self) -> None:
        """Wait for every background publish to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _send(self, notification: Notification) -> None:
        if self._bus is None:
            return
        task = asyncio.get_running_loop().create_task(self._publish(notification))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _publish(self, notification: Notification) -> None:
        msg = create_message(
            from_agent=self.AGENT_ID,
            topic=Topics.NOTIFICATIONS,
            msg_type=MessageType.NOTIFICATION,
            payload=notification,
        )
        try:
            await self._bus.publish(Topics.NOTIFICATIONS, msg)  # type: ignore[union-attr]
        except Exception:
            logger.exception("Failed to publish notification: %s", notification.text)
