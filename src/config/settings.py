"""
Configuration settings for the User API
"""

import os
import logging
from typing import List, Optional

# Configure logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def _int_env(name: str, default: int) -> int:
    """Read an integer environment variable, failing fast on bad values"""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} environment variable must be an integer, got {raw!r}")


def build_database_url(
    url: Optional[str] = None,
    host: str = "db",
    port: int = 5432,
    name: str = "usersdb",
    user: str = "user",
    password: str = "password",
) -> str:
    """Return the explicit DSN if one is given, otherwise compose one from its parts"""
    if url:
        return url
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


def parse_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


# Database configuration
DB_HOST = os.getenv("DB_HOST", "db")
DB_PORT = _int_env("DB_PORT", 5432)
DB_NAME = os.getenv("DB_NAME", "usersdb")
DB_USER = os.getenv("DB_USER", "user")
DB_PASSWORD = os.getenv("DB_PASSWORD", "password")
DATABASE_URL = build_database_url(
    os.getenv("DATABASE_URL"),
    host=DB_HOST,
    port=DB_PORT,
    name=DB_NAME,
    user=DB_USER,
    password=DB_PASSWORD,
)

DB_POOL_MIN_SIZE = _int_env("DB_POOL_MIN_SIZE", 1)
DB_POOL_MAX_SIZE = _int_env("DB_POOL_MAX_SIZE", 10)
DB_COMMAND_TIMEOUT = _int_env("DB_COMMAND_TIMEOUT", 60)

if DB_POOL_MIN_SIZE > DB_POOL_MAX_SIZE:
    raise ValueError("DB_POOL_MIN_SIZE cannot exceed DB_POOL_MAX_SIZE")

# HTTP server configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = _int_env("PORT", 3000)

# CORS settings
ALLOWED_ORIGINS = parse_origins(os.getenv("ALLOWED_ORIGINS", "*"))

logger.info(f"Database host: {DB_HOST}:{DB_PORT}/{DB_NAME}")
