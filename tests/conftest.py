"""
pytest configuration and fixtures for the User API test suite
The database is replaced with an in-memory service and mocked asyncpg pools.
"""

from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from app import create_app
from models.user import User
from services.users_service import get_users_service


class InMemoryUsersService:
    """Test double with the same interface as UsersService"""

    def __init__(self):
        self.users: Dict[int, User] = {}
        self._next_id = 1
        self.calls: List[str] = []

    async def list_users(self) -> List[User]:
        self.calls.append("list_users")
        return [self.users[user_id] for user_id in sorted(self.users)]

    async def create_user(self, first_name: str, last_name: str, birthday: date) -> User:
        self.calls.append("create_user")
        now = datetime.now(timezone.utc)
        user = User(
            id=self._next_id,
            firstName=first_name,
            lastName=last_name,
            birthday=birthday,
            createdAt=now,
            updatedAt=now
        )
        self.users[user.id] = user
        self._next_id += 1
        return user

    async def get_user_by_id(self, user_id: int) -> Optional[User]:
        self.calls.append("get_user_by_id")
        return self.users.get(user_id)

    async def update_user_by_id(
        self, user_id: int, first_name: str, last_name: str, birthday: date
    ) -> Optional[User]:
        self.calls.append("update_user_by_id")
        existing = self.users.get(user_id)
        if existing is None:
            return None
        updated = existing.model_copy(update={
            "firstName": first_name,
            "lastName": last_name,
            "birthday": birthday,
            "updatedAt": datetime.now(timezone.utc)
        })
        self.users[user_id] = updated
        return updated

    async def delete_user_by_id(self, user_id: int) -> bool:
        self.calls.append("delete_user_by_id")
        return self.users.pop(user_id, None) is not None


class FakePool:
    """Minimal stand-in for asyncpg.Pool that hands out one mocked connection"""

    def __init__(self, conn=None, acquire_error: Optional[BaseException] = None):
        self.conn = conn if conn is not None else AsyncMock()
        self.acquire_error = acquire_error

    @asynccontextmanager
    async def acquire(self):
        if self.acquire_error is not None:
            raise self.acquire_error
        yield self.conn


def make_row(user_id: int = 1, first_name: str = "Ann", last_name: str = "Lee",
             birthday: date = date(1990, 1, 1)) -> dict:
    now = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return {
        "id": user_id,
        "firstName": first_name,
        "lastName": last_name,
        "birthday": birthday,
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def users_service():
    return InMemoryUsersService()


@pytest.fixture
def app(users_service):
    application = create_app()
    application.dependency_overrides[get_users_service] = lambda: users_service
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    # The lifespan (pool creation) is not run by ASGITransport
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
