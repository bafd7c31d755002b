"""
Health check API route
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException
from database.connection import get_db_pool

router = APIRouter()
logger = logging.getLogger(__name__)

HEALTH_CHECK_FAILED = "Health check failed: database unavailable"

@router.get("")
async def health_check():
    """Health check - reports whether the database answers a trivial query"""
    db_pool = get_db_pool()
    if db_pool is None:
        logger.error("Health check failed: database pool not initialized")
        raise HTTPException(status_code=503, detail=HEALTH_CHECK_FAILED)

    try:
        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail=HEALTH_CHECK_FAILED)

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected"
    }
