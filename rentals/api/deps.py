from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from rentals.config import get_settings
from rentals.infrastructure.db.engine import build_engine, build_sessionmaker

settings = get_settings()

# Local file database when no URL is configured
DB_URL = settings.database_url or "sqlite+aiosqlite:///./rentals.db"

engine = build_engine(settings.model_copy(update={"database_url": DB_URL}))
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
