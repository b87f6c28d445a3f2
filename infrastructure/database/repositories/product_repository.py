from __future__ import annotations

from typing import Iterable, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models.product import Product


class ProductRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_all(self) -> List[Product]:
        stmt = select(Product).order_by(Product.id)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Product))
        return result.scalar_one()

    async def add_all(self, products: Iterable[Product]) -> List[Product]:
        products = list(products)
        self.db.add_all(products)
        await self.db.flush()
        return products
