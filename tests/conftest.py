"""
Examupdt portal - Test Configuration and Fixtures
"""
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncGenerator, Dict, List

import pytest
from httpx import AsyncClient, ASGITransport

# Set testing environment
os.environ.setdefault('JWT_SECRET', 'test-jwt-secret-key-for-testing')

from examupdt.config import Settings
from examupdt.services.auth_service import AuthService
from main import create_app

ADMIN_EMAIL = 'admin@examupdt.com'
ADMIN_PASSWORD = 'admin-password-123'


class StoreUnavailable(Exception):
    """Raised by the in-memory store to simulate a network or database error"""


class InMemoryTable:
    """Same call surface as db_service.TableClient, backed by a list of dicts"""

    def __init__(self, store: "InMemoryStore", name: str):
        self.store = store
        self.name = name
        self.rows: List[Dict[str, Any]] = []

    def _check(self):
        if self.store.offline:
            raise StoreUnavailable("connection refused")

    def _find(self, record_id):
        for row in self.rows:
            if row['id'] == record_id:
                return row
        return None

    def select(self, filters=None, contains=None, order_by=None, descending=False):
        self._check()
        rows = list(self.rows)
        for column, value in (filters or {}).items():
            rows = [row for row in rows if row.get(column) == value]
        for column, value in (contains or {}).items():
            rows = [row for row in rows if value.lower() in str(row.get(column) or '').lower()]
        if order_by:
            rows.sort(key=lambda row: str(row.get(order_by) or ''), reverse=descending)
        return [dict(row) for row in rows]

    def count(self, filters=None):
        return len(self.select(filters=filters))

    def get(self, record_id):
        self._check()
        row = self._find(record_id)
        return dict(row) if row else None

    def insert(self, record):
        self._check()
        row = dict(record)
        row.setdefault('id', uuid.uuid4().hex)
        if self._find(row['id']) is not None:
            raise StoreUnavailable(f"duplicate key value violates unique constraint \"{self.name}_pkey\"")
        self.rows.append(row)
        return dict(row)

    def update(self, record_id, partial):
        self._check()
        row = self._find(record_id)
        if row is None:
            return None
        row.update(partial)
        return dict(row)

    def delete(self, record_id):
        self._check()
        if record_id in self.store.failing_deletes:
            raise StoreUnavailable(f"delete of {record_id} timed out")
        row = self._find(record_id)
        if row is None:
            return False
        self.rows.remove(row)
        return True


class InMemoryStore:
    def __init__(self):
        self.tables: Dict[str, InMemoryTable] = {}
        self.offline = False
        self.failing_deletes: set = set()

    def table(self, name: str) -> InMemoryTable:
        if name not in self.tables:
            self.tables[name] = InMemoryTable(self, name)
        return self.tables[name]

    def seed(self, name: str, *records: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [self.table(name).insert(record) for record in records]

    def close_connections(self):
        pass


def days_ago(days: float, hours: float = 0) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days, hours=hours)).isoformat()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret='test-jwt-secret-key-for-testing',
        session_check_timeout=1.0,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
    )


@pytest.fixture
def auth_service(store: InMemoryStore, settings: Settings) -> AuthService:
    return AuthService(store, secret=settings.jwt_secret, expire_minutes=settings.jwt_expire_minutes)


@pytest.fixture
async def admin_token(auth_service: AuthService) -> str:
    """Bootstrap the admin account and sign in"""
    await auth_service.ensure_admin(ADMIN_EMAIL, ADMIN_PASSWORD, name='Admin')
    result = await auth_service.sign_in(ADMIN_EMAIL, ADMIN_PASSWORD)
    return result.token


@pytest.fixture
def auth_headers(admin_token: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def app(settings: Settings, store: InMemoryStore, auth_service: AuthService):
    return create_app(settings, store=store, auth_service=auth_service)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client over the in-memory store"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac
