import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.repositories import ProductRepository
from routers.dependencies import get_db
from schemas import ProductResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/products", response_model=List[ProductResponse])
async def list_products(db: AsyncSession = Depends(get_db)) -> List[ProductResponse]:
    try:
        products = await ProductRepository(db).list_all()
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("Listing products failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database error: {exc}",
        ) from exc
    return [ProductResponse.model_validate(product) for product in products]
