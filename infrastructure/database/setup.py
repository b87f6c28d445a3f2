from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.database import check_connection, create_tables
from infrastructure.database.models.product import Product
from infrastructure.database.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

DEFAULT_PRODUCTS = (
    ("Laptop", Decimal("999.99"), "High-performance laptop"),
    ("Mouse", Decimal("29.99"), "Wireless mouse"),
    ("Keyboard", Decimal("79.99"), "Mechanical keyboard"),
)


class SeedOutcome(str, Enum):
    SEEDED = "seeded"
    ALREADY_SEEDED = "already_seeded"
    UNAVAILABLE = "unavailable"


async def seed_products_if_empty(
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
) -> SeedOutcome:
    """Insert the default products when the table is empty.

    A store that cannot be reached is logged and reported as
    ``SeedOutcome.UNAVAILABLE``; the caller keeps starting up.
    """
    try:
        await check_connection(engine)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
        logger.warning("Database is not reachable; skipping product seeding: %s", exc)
        return SeedOutcome.UNAVAILABLE

    try:
        await create_tables(engine)
        async with session_factory() as session:
            async with session.begin():
                return await _seed_products(session)
    except SQLAlchemyError:
        logger.exception("Product seeding failed")
        return SeedOutcome.UNAVAILABLE


async def _seed_products(session: AsyncSession) -> SeedOutcome:
    repository = ProductRepository(session)
    existing = await repository.count()
    if existing:
        logger.info("Products table already holds %d rows; seeding skipped", existing)
        return SeedOutcome.ALREADY_SEEDED

    await repository.add_all(
        Product(name=name, price=price, description=description)
        for name, price, description in DEFAULT_PRODUCTS
    )
    logger.info("Seeded %d default products", len(DEFAULT_PRODUCTS))
    return SeedOutcome.SEEDED
