"""
Users service - persistence binding for the Users table
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

import asyncpg

from database.connection import get_db_pool
from database.schema import USERS_TABLE
from models.user import User

logger = logging.getLogger(__name__)

USER_COLUMNS = 'id, "firstName", "lastName", birthday, "createdAt", "updatedAt"'


class UserStoreError(Exception):
    """Base class for failures raised by the users store"""


class ValidationError(UserStoreError):
    """A required column was missing or violated a constraint"""


class StoreUnavailable(UserStoreError):
    """The database could not be reached"""


_CONNECTION_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    asyncpg.PostgresConnectionError,
    asyncpg.CannotConnectNowError,
    asyncpg.ConnectionDoesNotExistError,
    asyncpg.TooManyConnectionsError,
)


class UsersService:
    """Service for user CRUD operations"""

    def __init__(self, pool=None):
        self._pool = pool

    @property
    def pool(self):
        pool = self._pool if self._pool is not None else get_db_pool()
        if pool is None:
            raise StoreUnavailable("Database pool is not initialized")
        return pool

    @asynccontextmanager
    async def _connection(self):
        """Acquire a pooled connection, translating driver errors into store errors"""
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except (asyncpg.NotNullViolationError, asyncpg.CheckViolationError) as e:
            logger.warning(f"Constraint violation on {USERS_TABLE}: {e}")
            raise ValidationError(str(e)) from e
        except _CONNECTION_ERRORS as e:
            logger.error(f"Database unavailable: {e}")
            raise StoreUnavailable(str(e)) from e

    async def list_users(self) -> List[User]:
        """Return every stored user, ordered by id"""
        async with self._connection() as conn:
            rows = await conn.fetch(
                f"SELECT {USER_COLUMNS} FROM {USERS_TABLE} ORDER BY id"
            )
        return [User(**dict(row)) for row in rows]

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        birthday: date
    ) -> User:
        """
        Insert a new user

        Args:
            first_name: Given name
            last_name: Family name
            birthday: Date of birth

        Returns:
            The stored user including its assigned id
        """
        query = f"""
            INSERT INTO {USERS_TABLE} ("firstName", "lastName", birthday, "createdAt", "updatedAt")
            VALUES ($1, $2, $3, NOW(), NOW())
            RETURNING {USER_COLUMNS}
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(query, first_name, last_name, birthday)

        user = User(**dict(row))
        logger.info(f"Created user {user.id}")
        return user

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Return the user with the given id, or None when absent"""
        async with self._connection() as conn:
            row = await conn.fetchrow(
                f"SELECT {USER_COLUMNS} FROM {USERS_TABLE} WHERE id = $1",
                user_id
            )
        if row is None:
            return None
        return User(**dict(row))

    async def update_user_by_id(
        self,
        user_id: int,
        first_name: str,
        last_name: str,
        birthday: date
    ) -> Optional[User]:
        """
        Overwrite all writable fields of a user

        Returns:
            The updated user, or None when no user has this id
        """
        query = f"""
            UPDATE {USERS_TABLE}
            SET "firstName" = $2, "lastName" = $3, birthday = $4, "updatedAt" = NOW()
            WHERE id = $1
            RETURNING {USER_COLUMNS}
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(query, user_id, first_name, last_name, birthday)

        if row is None:
            logger.info(f"Update skipped, user {user_id} not found")
            return None
        logger.info(f"Updated user {user_id}")
        return User(**dict(row))

    async def delete_user_by_id(self, user_id: int) -> bool:
        """Delete a user; returns False when no user has this id"""
        async with self._connection() as conn:
            result = await conn.execute(
                f"DELETE FROM {USERS_TABLE} WHERE id = $1",
                user_id
            )

        # asyncpg returns the command tag, e.g. "DELETE 1"
        deleted_count = int(result.split()[-1]) if result else 0
        if deleted_count == 0:
            logger.info(f"Delete skipped, user {user_id} not found")
            return False
        logger.info(f"Deleted user {user_id}")
        return True


# Global service instance
_users_service: Optional[UsersService] = None

def get_users_service() -> UsersService:
    """Get the global users service instance"""
    global _users_service
    if _users_service is None:
        _users_service = UsersService()
    return _users_service
