from __future__ import annotations

import logging
from typing import Any, Type, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, ValidationError

from infrastructure.external.placeholder_api import (
    UpstreamError,
    UpstreamPayloadError,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_upstream(model: Type[ModelT], payload: Any) -> ModelT:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise UpstreamPayloadError(f"Upstream {model.__name__} payload is invalid: {exc}") from exc


def upstream_http_error(exc: UpstreamError) -> HTTPException:
    if isinstance(exc, UpstreamStatusError) and exc.status_code == status.HTTP_404_NOT_FOUND:
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")
    logger.warning("Upstream call failed: %s", exc)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Error: {exc}")
