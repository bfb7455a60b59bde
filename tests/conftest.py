import os
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'app' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENV", "development")
os.environ.setdefault("DB_HOST", "localhost")
os.environ.setdefault("DB_NAME", "user_api_test")

from app.domains.users.entities import User  # noqa: E402
from app.domains.users.exceptions import NotFoundError, StoreError  # noqa: E402
from app.domains.users.repository import UserRepository  # noqa: E402
from app.domains.users.services import UserService  # noqa: E402

FIXED_TODAY = date(2024, 6, 15)


class InMemoryUserRepository(UserRepository):
    """Test double: keeps users in a dict and records every call."""

    def __init__(self) -> None:
        self.users: Dict[int, User] = {}
        self.calls: List[tuple] = []
        self.fail_with: Exception | None = None
        self._next_id = 1

    def _check(self, *call) -> None:
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    async def create(self, name: str, dob: date) -> User:
        self._check("create", name, dob)
        now = datetime.now(timezone.utc)
        user = User(id=self._next_id, name=name, dob=dob, created_at=now, updated_at=now)
        self.users[user.id] = user
        self._next_id += 1
        return user

    async def get_by_id(self, user_id: int) -> User:
        self._check("get_by_id", user_id)
        if user_id not in self.users:
            raise NotFoundError(user_id)
        return self.users[user_id]

    async def list(self, limit: int, offset: int) -> List[User]:
        self._check("list", limit, offset)
        ordered = [self.users[k] for k in sorted(self.users)]
        return ordered[offset:offset + limit]

    async def count(self) -> int:
        self._check("count")
        return len(self.users)

    async def update(self, user_id: int, name: str, dob: date) -> User:
        self._check("update", user_id, name, dob)
        if user_id not in self.users:
            raise NotFoundError(user_id)
        current = self.users[user_id]
        updated = User(
            id=user_id,
            name=name,
            dob=dob,
            created_at=current.created_at,
            updated_at=datetime.now(timezone.utc),
        )
        self.users[user_id] = updated
        return updated

    async def delete(self, user_id: int) -> None:
        self._check("delete", user_id)
        if self.users.pop(user_id, None) is None:
            raise NotFoundError(user_id)


@pytest.fixture()
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def service(repo: InMemoryUserRepository) -> UserService:
    return UserService(repo, today=lambda: FIXED_TODAY)


@pytest.fixture()
def client(service: UserService):
    # lazy import after env configured
    from app.api.dependencies import get_user_service
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_user_service] = lambda: service
    return TestClient(app)


@pytest.fixture()
def store_failure() -> StoreError:
    return StoreError("connection refused")
