from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional

from azure.core.exceptions import AzureError
from azure.servicebus import ServiceBusMessage, ServiceBusReceiveMode
from azure.servicebus.aio import ServiceBusClient

from config import settings

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str], Awaitable[None]]


class ConfigurationError(RuntimeError):
    """Required connection settings are missing; the service must not start."""


class QueueOperationError(Exception):
    """A send or receive against Service Bus failed."""


@dataclass(frozen=True)
class MessageReceiveOptions:
    """Limits for a single pull from a queue."""

    max_message_count: int = 10
    max_wait_time: float = 5.0


@dataclass(frozen=True)
class MessageProcessorOptions:
    """Settings for the standing queue subscription.

    ``max_wait_time`` of ``None`` keeps each receiver open indefinitely;
    ``reconnect_delay_seconds`` is the pause before a failed receiver is
    reopened.
    """

    queue_name: str
    max_concurrent_calls: int = 1
    max_wait_time: Optional[float] = None
    prefetch_count: int = 0
    reconnect_delay_seconds: float = 5.0


class ServiceBusQueueClient:
    """Send, pull and subscribe against Azure Service Bus queues and topics.

    Received messages are settled with lock-then-acknowledge: each message is
    taken under a PEEK_LOCK and completed only after it has been handled. A
    message that is never completed is redelivered once its lock expires.
    """

    def __init__(self, client: ServiceBusClient, *, credential: Any = None) -> None:
        self._client = client
        self._credential = credential
        self._processor_tasks: List[asyncio.Task] = []

    @classmethod
    def from_settings(
        cls,
        *,
        connection_string: Optional[str] = settings.SERVICE_BUS_CONNECTION_STRING,
        namespace: Optional[str] = settings.SERVICE_BUS_NAMESPACE,
        use_managed_identity: bool = settings.SERVICE_BUS_USE_MANAGED_IDENTITY,
    ) -> "ServiceBusQueueClient":
        if use_managed_identity:
            if not namespace:
                raise ConfigurationError(
                    "SERVICE_BUS_NAMESPACE is required when SERVICE_BUS_USE_MANAGED_IDENTITY is enabled"
                )
            from azure.identity.aio import DefaultAzureCredential

            credential = DefaultAzureCredential()
            logger.info("Connecting to Service Bus namespace %s with managed identity", namespace)
            return cls(
                ServiceBusClient(fully_qualified_namespace=namespace, credential=credential),
                credential=credential,
            )

        if not connection_string:
            raise ConfigurationError(
                "SERVICE_BUS_CONNECTION_STRING is not configured. Set it, or enable "
                "SERVICE_BUS_USE_MANAGED_IDENTITY with SERVICE_BUS_NAMESPACE."
            )
        logger.info("Connecting to Service Bus with a connection string")
        return cls(ServiceBusClient.from_connection_string(connection_string))

    async def send_to_queue(self, queue_name: str, text: str) -> None:
        try:
            async with self._client.get_queue_sender(queue_name=queue_name) as sender:
                await sender.send_messages(ServiceBusMessage(text))
        except AzureError as exc:
            raise QueueOperationError(str(exc)) from exc
        logger.info("Sent message to queue %s", queue_name)

    async def send_to_topic(self, topic_name: str, text: str) -> None:
        try:
            async with self._client.get_topic_sender(topic_name=topic_name) as sender:
                await sender.send_messages(ServiceBusMessage(text))
        except AzureError as exc:
            raise QueueOperationError(str(exc)) from exc
        logger.info("Sent message to topic %s", topic_name)

    async def receive_up_to(self, queue_name: str, max_count: int, max_wait: float) -> List[str]:
        """Pull at most ``max_count`` messages, waiting no more than ``max_wait`` seconds."""
        if max_count < 1:
            raise ValueError("max_count must be at least 1")
        if max_wait <= 0:
            raise ValueError("max_wait must be positive")

        bodies: List[str] = []
        try:
            async with self._client.get_queue_receiver(
                queue_name=queue_name,
                receive_mode=ServiceBusReceiveMode.PEEK_LOCK,
            ) as receiver:
                messages = await receiver.receive_messages(
                    max_message_count=max_count,
                    max_wait_time=max_wait,
                )
                for message in messages:
                    bodies.append(str(message))
                    await self._settle(receiver.complete_message, message)
        except AzureError as exc:
            raise QueueOperationError(str(exc)) from exc

        logger.info("Received %d message(s) from queue %s", len(bodies), queue_name)
        return bodies

    @property
    def processor_running(self) -> bool:
        return any(not task.done() for task in self._processor_tasks)

    def start_processor(self, options: MessageProcessorOptions, handler: MessageHandler) -> bool:
        """Start the standing subscription; returns False when it is already running."""
        if self.processor_running:
            return False
        if options.max_concurrent_calls < 1:
            raise ValueError("max_concurrent_calls must be at least 1")

        self._processor_tasks = [
            asyncio.create_task(
                self._run_processor(options, handler),
                name=f"service-bus-processor-{options.queue_name}-{worker}",
            )
            for worker in range(options.max_concurrent_calls)
        ]
        logger.info(
            "Started %d message processor(s) on queue %s",
            options.max_concurrent_calls,
            options.queue_name,
        )
        return True

    async def stop_processor(self) -> None:
        tasks, self._processor_tasks = self._processor_tasks, []
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("Stopped message processor")

    async def close(self) -> None:
        await self.stop_processor()
        await self._client.close()
        if self._credential is not None:
            await self._credential.close()

    async def _run_processor(self, options: MessageProcessorOptions, handler: MessageHandler) -> None:
        while True:
            try:
                async with self._client.get_queue_receiver(
                    queue_name=options.queue_name,
                    receive_mode=ServiceBusReceiveMode.PEEK_LOCK,
                    max_wait_time=options.max_wait_time,
                    prefetch_count=options.prefetch_count,
                ) as receiver:
                    async for message in receiver:
                        await self._dispatch(receiver, message, handler)
            except Exception:
                logger.exception(
                    "Message processor on queue %s failed; reopening in %.1fs",
                    options.queue_name,
                    options.reconnect_delay_seconds,
                )
                await asyncio.sleep(options.reconnect_delay_seconds)

    async def _dispatch(self, receiver: Any, message: Any, handler: MessageHandler) -> None:
        body = str(message)
        try:
            await handler(body)
        except Exception:
            logger.exception("Message handler failed for message %s", message.message_id)
            await self._settle(receiver.abandon_message, message)
            return
        await self._settle(receiver.complete_message, message)

    @staticmethod
    async def _settle(settle: Callable[[Any], Awaitable[None]], message: Any) -> None:
        # A lost lock means the message will be redelivered
        try:
            await settle(message)
        except AzureError as exc:
            logger.warning("Could not settle message %s: %s", message.message_id, exc)
