import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from infrastructure.context import ServiceContainer
from infrastructure.messaging.service_bus import QueueOperationError
from routers.dependencies import get_services
from services.messaging import log_received_message

router = APIRouter()
logger = logging.getLogger(__name__)


def _queue_http_error(exc: Exception) -> HTTPException:
    logger.warning("Service Bus operation failed: %s", exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Error: {exc}")


@router.post("/send-message", response_class=PlainTextResponse)
async def send_message(
    message: str = Query(..., description="Text body of the queue message"),
    services: ServiceContainer = Depends(get_services),
) -> str:
    try:
        await services.queue.send_to_queue(services.queue_name, message)
    except QueueOperationError as exc:
        raise _queue_http_error(exc) from exc
    return f"Message sent to queue: {message}"


@router.post("/send-topic-message", response_class=PlainTextResponse)
async def send_topic_message(
    message: str = Query(..., description="Text body of the topic message"),
    services: ServiceContainer = Depends(get_services),
) -> str:
    try:
        await services.queue.send_to_topic(services.topic_name, message)
    except QueueOperationError as exc:
        raise _queue_http_error(exc) from exc
    return f"Message sent to topic: {message}"


@router.get("/receive-messages", response_model=List[str])
async def receive_messages(
    max_messages: Optional[int] = Query(None, ge=1, le=100),
    max_wait_seconds: Optional[float] = Query(None, gt=0, le=60),
    services: ServiceContainer = Depends(get_services),
) -> List[str]:
    options = services.receive_options
    try:
        return await services.queue.receive_up_to(
            services.queue_name,
            max_messages or options.max_message_count,
            max_wait_seconds or options.max_wait_time,
        )
    except QueueOperationError as exc:
        raise _queue_http_error(exc) from exc


@router.post("/start-message-processor", response_class=PlainTextResponse)
async def start_message_processor(services: ServiceContainer = Depends(get_services)) -> str:
    started = services.queue.start_processor(services.processor_options, log_received_message)
    if not started:
        return "Message processor is already running"
    return "Message processor started"
