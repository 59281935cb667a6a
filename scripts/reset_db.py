import asyncio
import sys
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from rentals.api.deps import engine  # noqa: E402
from rentals.infrastructure.db.engine import create_schema, drop_schema  # noqa: E402
from rentals.infrastructure.db.tables import metadata  # noqa: E402


async def reset():
    await drop_schema(engine)
    for table in reversed(metadata.sorted_tables):
        print(f"Dropped {table.name}")

    await create_schema(engine)
    print("Recreated all tables.")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(reset())
