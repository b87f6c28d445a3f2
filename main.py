from fastapi import FastAPI
import uvicorn
import logging
from contextlib import asynccontextmanager

from config import settings
from infrastructure.context import build_service_container
from infrastructure.database.setup import seed_products_if_empty

# Import routers
from routers.posts_router import router as posts_router
from routers.users_router import router as users_router
from routers.identity_router import router as identity_router
from routers.messaging_router import router as messaging_router
from routers.product_router import router as product_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    services = build_service_container(settings)
    try:
        outcome = await seed_products_if_empty(services.engine, services.session_factory)
    except Exception:
        await services.aclose()
        raise
    logger.info("Product seeding finished: %s", outcome.value)
    app.state.services = services
    yield
    # Shutdown
    app.state.services = None
    await services.aclose()


app = FastAPI(
    title="Gateway Sample API",
    description="Pass-through endpoints for a JSON test API, Service Bus and a products table",
    version="1.0.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(posts_router, tags=["Posts"])
app.include_router(users_router, tags=["Users"])
app.include_router(identity_router, tags=["Identity"])
app.include_router(messaging_router, tags=["Messaging"])
app.include_router(product_router, tags=["Products"])


# Health check
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Run app
if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=True)
