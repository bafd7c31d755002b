"""
Fixed schema for the users table, applied once at startup
"""

import logging

logger = logging.getLogger(__name__)

USERS_TABLE = '"Users"'

# Column names keep their camelCase spelling so rows map 1:1 onto the JSON contract
USERS_TABLE_DDL = f"""
    CREATE TABLE IF NOT EXISTS {USERS_TABLE} (
        id SERIAL PRIMARY KEY,
        "firstName" VARCHAR(255) NOT NULL,
        "lastName" VARCHAR(255) NOT NULL,
        birthday DATE NOT NULL,
        "createdAt" TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        "updatedAt" TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""

async def ensure_schema(pool) -> None:
    """Create the users table if it does not exist yet"""
    async with pool.acquire() as conn:
        await conn.execute(USERS_TABLE_DDL)
    logger.info(f"Schema ensured for table {USERS_TABLE}")
