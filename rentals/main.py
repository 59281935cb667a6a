import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from rentals.api.deps import engine
from rentals.api.errors import register_exception_handlers
from rentals.api.routers.bookings import router as bookings_router
from rentals.api.routers.health import router as health_router
from rentals.api.routers.payments import router as payments_router
from rentals.config import get_settings
from rentals.infrastructure.db.engine import create_schema

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        # Dev/demo convenience; production schemas are managed separately.
        await create_schema(engine)
    logger.info("Reservation core started", extra={"in_memory": settings.use_in_memory})
    yield
    await engine.dispose()


app = FastAPI(
    title="Rentals Reservations API",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(health_router, tags=["Health"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
app.include_router(payments_router, prefix="/api/v1", tags=["Payments"])
