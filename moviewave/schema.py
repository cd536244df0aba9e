"""
Bootstrap the MovieWave tables on a development database.

Supabase projects already have these tables; this is for local Postgres:

    DATABASE_URL=postgresql://... python -m moviewave.schema
"""

import asyncio
import logging
from typing import List

import asyncpg
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateIndex, CreateTable

from .config import get_settings
from .logging_config import setup_logging
from .models.base import Base
# Imported for their side effect of registering tables on Base.metadata
from .models import content, favorite, rating, user  # noqa: F401

logger = logging.getLogger(__name__)


def schema_statements() -> List[str]:
    """CREATE statements for every model, in dependency order."""
    dialect = postgresql.dialect()
    statements = []
    for table in Base.metadata.sorted_tables:
        statements.append(str(CreateTable(table, if_not_exists=True).compile(dialect=dialect)))
        for index in sorted(table.indexes, key=lambda i: i.name):
            statements.append(str(CreateIndex(index, if_not_exists=True).compile(dialect=dialect)))
    return statements


async def create_schema(conn: asyncpg.Connection) -> int:
    statements = schema_statements()
    for statement in statements:
        await conn.execute(statement)
    logger.info(f"Applied {len(statements)} schema statements")
    return len(statements)


async def main():
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    conn = await asyncpg.connect(settings.DATABASE_URL)
    try:
        await create_schema(conn)
    finally:
        await conn.close()


if __name__ == "__main__":
    asyncio.run(main())
