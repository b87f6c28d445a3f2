from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.context import ServiceContainer
from infrastructure.external.placeholder_api import PlaceholderApiClient


def get_services(request: Request) -> ServiceContainer:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is still starting up",
        )
    return services


def get_placeholder_api(services: ServiceContainer = Depends(get_services)) -> PlaceholderApiClient:
    return services.placeholder_api


async def get_db(services: ServiceContainer = Depends(get_services)) -> AsyncIterator[AsyncSession]:
    if services.session_factory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database is not configured",
        )
    db = services.session_factory()
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    finally:
        await db.close()
