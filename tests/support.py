"""Shared test helpers: isolated settings, a throwaway SQLite database, and account/token builders."""

import shutil
import tempfile
import unittest
from datetime import datetime

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import Database
from app.core.security import create_access_token, hash_password
from app.main import create_app
from app.models import User

TEST_SECRET = "test-secret-0123456789-abcdefghijklmnop"
TEST_ROUNDS = 4


def make_settings(database_url: str, **overrides: object) -> Settings:
    """Settings that ignore the developer's .env and use cheap bcrypt."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": database_url,
        "DB_CREATE_ALL": True,
        "JWT_SECRET": TEST_SECRET,
        "JWT_ALGORITHM": "HS256",
        "BCRYPT_ROUNDS": TEST_ROUNDS,
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def add_user(
    db: Session,
    email: str,
    password: str = "secret123",
    role: str = "user",
    user_id: int | None = None,
    first_name: str | None = "Test",
    last_name: str | None = "User",
) -> User:
    """Insert and commit an account directly."""
    user = User(
        email=email.lower(),
        password_hash=hash_password(password, rounds=TEST_ROUNDS),
        role=role,
        first_name=first_name,
        last_name=last_name,
    )
    if user_id is not None:
        user.id = user_id
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


class DatabaseTestCase(unittest.TestCase):
    """Fresh SQLite file per test, tables created, one session in self.db."""

    def setUp(self) -> None:
        self._tmpdir = tempfile.mkdtemp(prefix="bizdesk-test-")
        self.settings = make_settings(f"sqlite:///{self._tmpdir}/test.db")
        self.database = Database(self.settings)
        self.database.create_all()
        self.db = self.database.session()

    def tearDown(self) -> None:
        self.db.close()
        self.database.dispose()
        shutil.rmtree(self._tmpdir, ignore_errors=True)

    def token_for(self, user: User, now: datetime | None = None) -> str:
        token, _ = create_access_token(sub=user.id, role=user.role, settings=self.settings, now=now)
        return token


class ApiTestCase(unittest.TestCase):
    """Runs the full app (lifespan included) against a fresh SQLite file."""

    def setUp(self) -> None:
        self._tmpdir = tempfile.mkdtemp(prefix="bizdesk-test-")
        self.settings = make_settings(f"sqlite:///{self._tmpdir}/test.db")
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.db = self.app.state.database.session()

    def tearDown(self) -> None:
        self.db.close()
        self.client.__exit__(None, None, None)
        shutil.rmtree(self._tmpdir, ignore_errors=True)

    def url(self, path: str) -> str:
        return f"{self.settings.API_V1_PREFIX}{path}"

    def token_for(self, user: User, now: datetime | None = None) -> str:
        token, _ = create_access_token(sub=user.id, role=user.role, settings=self.settings, now=now)
        return token

    def auth(self, user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user)}"}
