"""SessionBusClient — async wrapper around NATS JetStream for Tradepost."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

import nats
from nats.aio.client import Client as NATSClient
from nats.aio.msg import Msg
from nats.js.api import ConsumerConfig, DeliverPolicy
from nats.js.client import JetStreamContext

from tradepost.models.envelope import Envelope
from tradepost.models.topics import to_nats_subject

logger = logging.getLogger(__name__)

STREAM_NAME = "TRADEPOST"
# Prompt subjects (`prompt.>`) stay on core NATS for request/reply
STREAM_SUBJECTS = ["merchant.>", "session.>", "player.>"]


class SessionBusClient:
    """Async NATS client for the Tradepost message bus.

    Usage:
        client = SessionBusClient("nats://localhost:4222")
        await client.connect()
        await client.publish(Topics.TRADE, envelope)
        await client.subscribe(Topics.TRADE, handler)
        reply = await client.request(Topics.quantity_prompt("pc-01"), envelope)
        await client.close()
    """

    def __init__(self, url: str = "nats://localhost:4222") -> None:
        self._url = url
        self._nc: NATSClient | None = None
        self._js: JetStreamContext | None = None
        self._subscriptions: list[Any] = []
        self._consumers: set[asyncio.Task[None]] = set()

    @property
    def is_connected(self) -> bool:
        return self._nc is not None and self._nc.is_connected

    async def connect(self) -> None:
        """Connect to NATS and set up the JetStream stream."""
        self._nc = await nats.connect(
            self._url,
            reconnected_cb=self._on_reconnect,
            disconnected_cb=self._on_disconnect,
            error_cb=self._on_error,
            max_reconnect_attempts=10,
            reconnect_time_wait=2,
        )
        self._js = self._nc.jetstream()

        try:
            await self._js.find_stream_name_by_subject(STREAM_SUBJECTS[0])
            logger.info("JetStream stream '%s' already exists", STREAM_NAME)
        except Exception:
            await self._js.add_stream(
                name=STREAM_NAME,
                subjects=STREAM_SUBJECTS,
            )
            logger.info("Created JetStream stream '%s'", STREAM_NAME)

    async def publish(self, topic: str, envelope: Envelope) -> None:
        """Publish an envelope to a topic via JetStream.

        Args:
            topic: Topic path (e.g., `/merchant/trade`).
            envelope: The message envelope to publish.
        """
        if self._js is None:
            raise RuntimeError("Not connected. Call connect() first.")

        subject = to_nats_subject(topic)
        data = envelope.model_dump_json(by_alias=True).encode()
        await self._js.publish(subject, data)
        logger.debug("Published to %s: %s", subject, envelope.id)

    async def subscribe(
        self,
        topic: str,
        handler: Callable[[Envelope], Coroutine[Any, Any, None]],
        durable: str | None = None,
        ack_wait: float | None = None,
    ) -> None:
        """Subscribe to a topic. Tries JetStream first, falls back to core NATS.

        Messages are acked once `handler` returns, so `ack_wait` must outlast
        the slowest handler or JetStream redelivers the message.

        Args:
            topic: Topic path (e.g., `/merchant/trade`).
            handler: Async callback receiving an Envelope.
            durable: Optional durable consumer name for JetStream.
            ack_wait: Seconds JetStream waits for the ack (server default 30).
        """
        subject = to_nats_subject(topic)

        async def _msg_handler(msg: Msg) -> None:
            try:
                envelope = Envelope.model_validate_json(msg.data)
                await handler(envelope)
            except Exception:
                logger.exception("Error handling message on %s", subject)
            finally:
                # Auto-ack for JetStream messages
                if msg._ackd is not True:
                    try:
                        await msg.ack()
                    except Exception:
                        logger.debug("Ack skipped for message on %s", subject)

        if self._js is not None:
            try:
                sub = await self._js.subscribe(
                    subject,
                    durable=durable,
                    manual_ack=True,
                    deliver_policy=DeliverPolicy.NEW if durable is None else None,
                    config=ConsumerConfig(ack_wait=ack_wait) if ack_wait is not None else None,
                )
                self._subscriptions.append(sub)
                task = asyncio.ensure_future(self._consume(sub, _msg_handler))
                self._consumers.add(task)
                task.add_done_callback(self._consumers.discard)
                logger.info("JetStream subscribed to %s", subject)
                return
            except Exception:
                logger.debug("JetStream subscribe failed for %s, falling back to core", subject)

        if self._nc is None:
            raise RuntimeError("Not connected. Call connect() first.")
        sub = await self._nc.subscribe(subject, cb=_msg_handler)
        self._subscriptions.append(sub)
        logger.info("Core NATS subscribed to %s", subject)

    async def request(self, topic: str, envelope: Envelope, timeout: float = 60.0) -> Envelope:
        """Send an envelope and wait for a single reply on core NATS.

        Raises:
            RuntimeError: If not connected.
            nats.errors.TimeoutError: If nobody replies within `timeout` seconds.
            nats.errors.NoRespondersError: If nobody is serving the topic.
        """
        if self._nc is None:
            raise RuntimeError("Not connected. Call connect() first.")

        subject = to_nats_subject(topic)
        data = envelope.model_dump_json(by_alias=True).encode()
        msg = await self._nc.request(subject, data, timeout=timeout)
        logger.debug("Reply on %s for %s", subject, envelope.id)
        return Envelope.model_validate_json(msg.data)

    async def serve(
        self,
        topic: str,
        handler: Callable[[Envelope], Awaitable[Envelope]],
    ) -> None:
        """Answer requests on a topic with the envelope `handler` returns."""
        if self._nc is None:
            raise RuntimeError("Not connected. Call connect() first.")

        subject = to_nats_subject(topic)

        async def _request_handler(msg: Msg) -> None:
            try:
                envelope = Envelope.model_validate_json(msg.data)
                reply = await handler(envelope)
                await msg.respond(reply.model_dump_json(by_alias=True).encode())
            except Exception:
                logger.exception("Error answering request on %s", subject)

        sub = await self._nc.subscribe(subject, cb=_request_handler)
        self._subscriptions.append(sub)
        logger.info("Serving requests on %s", subject)

    async def _consume(self, sub: Any, handler: Callable[[Msg], Coroutine[Any, Any, None]]) -> None:
        """Consume messages from a JetStream push subscription."""
        try:
            async for msg in sub.messages:
                await handler(msg)
        except Exception:
            logger.debug("Subscription consumer stopped")

    async def close(self) -> None:
        """Unsubscribe from all topics and disconnect."""
        for sub in self._subscriptions:
            try:
                await sub.unsubscribe()
            except Exception:
                logger.debug("Unsubscribe failed during close")
        self._subscriptions.clear()

        if self._nc is not None:
            await self._nc.drain()
            self._nc = None
            self._js = None
        logger.info("Disconnected from NATS")

    async def _on_reconnect(self, _: Any = None) -> None:
        logger.info("Reconnected to NATS at %s", self._url)

    async def _on_disconnect(self, _: Any = None) -> None:
        logger.warning("Disconnected from NATS")

    async def _on_error(self, e: Exception) -> None:
        logger.error("NATS error: %s", e)
