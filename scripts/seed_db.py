import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import insert, select  # noqa: E402

from rentals.api.deps import engine  # noqa: E402
from rentals.infrastructure.db.engine import create_schema  # noqa: E402
from rentals.infrastructure.db.tables import listings  # noqa: E402
from rentals.infrastructure.demo_data import DEMO_LISTINGS  # noqa: E402


async def seed():
    await create_schema(engine)
    print("Created missing tables.")

    async with engine.begin() as conn:
        existing = set((await conn.execute(select(listings.c.id))).scalars().all())
        rows = [dict(row, active=True) for row in DEMO_LISTINGS if row["id"] not in existing]
        if rows:
            await conn.execute(insert(listings), rows)
        print(f"Seeded {len(rows)} listings.")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
