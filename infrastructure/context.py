from __future__ import annotations

import logging
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING, Optional

from infrastructure.database.database import build_engine, build_session_factory
from infrastructure.external.placeholder_api import PlaceholderApiClient
from infrastructure.messaging.service_bus import (
    MessageProcessorOptions,
    MessageReceiveOptions,
    ServiceBusQueueClient,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Long-lived client handles shared by every request.

    Built once at startup and read-only afterwards.
    """

    placeholder_api: PlaceholderApiClient
    queue: ServiceBusQueueClient
    queue_name: str
    topic_name: str
    receive_options: MessageReceiveOptions
    processor_options: MessageProcessorOptions
    engine: Optional["AsyncEngine"] = None
    session_factory: Optional["async_sessionmaker[AsyncSession]"] = None

    async def aclose(self) -> None:
        await self.queue.close()
        await self.placeholder_api.aclose()
        if self.engine is not None:
            await self.engine.dispose()


def build_service_container(settings: ModuleType) -> ServiceContainer:
    """Construct every client from configuration; raises when settings are incomplete."""
    # The engine opens no connections until first use
    engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    queue = ServiceBusQueueClient.from_settings(
        connection_string=settings.SERVICE_BUS_CONNECTION_STRING,
        namespace=settings.SERVICE_BUS_NAMESPACE,
        use_managed_identity=settings.SERVICE_BUS_USE_MANAGED_IDENTITY,
    )
    logger.info("Service container built (upstream=%s)", settings.UPSTREAM_BASE_URL)

    return ServiceContainer(
        placeholder_api=PlaceholderApiClient(
            base_url=settings.UPSTREAM_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        ),
        queue=queue,
        queue_name=settings.SERVICE_BUS_QUEUE_NAME,
        topic_name=settings.SERVICE_BUS_TOPIC_NAME,
        receive_options=MessageReceiveOptions(
            max_message_count=settings.SERVICE_BUS_MAX_MESSAGES,
            max_wait_time=settings.SERVICE_BUS_MAX_WAIT_SECONDS,
        ),
        processor_options=MessageProcessorOptions(queue_name=settings.SERVICE_BUS_QUEUE_NAME),
        engine=engine,
        session_factory=build_session_factory(engine),
    )
