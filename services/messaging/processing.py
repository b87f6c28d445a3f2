from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


async def log_received_message(body: str) -> None:
    """Default handler for the standing queue subscription."""
    logger.info("Processor received message: %s", body)
