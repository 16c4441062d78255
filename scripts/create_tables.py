# scripts/create_tables.py
import sys
from pathlib import Path

# Ensure project root is on the path when running this script directly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from timesheet_access.infrastructure.database import models  # noqa: F401  (registers tables)
from timesheet_access.infrastructure.database.session import Base, get_engine


async def create_tables():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("Tables created:", ", ".join(sorted(Base.metadata.tables)))


asyncio.run(create_tables())
