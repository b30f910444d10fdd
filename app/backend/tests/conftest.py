"""
Shared fixtures for API tests

The API is exercised through FastAPI's TestClient with `get_db` overridden by
an in-memory session that records every statement and hands back queued rows,
so no PostgreSQL server is needed.
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add backend directory to path
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

from main import app  # noqa: E402
from database.connection import get_db  # noqa: E402


class FakeResult:
    """Just enough of SQLAlchemy's Result/MappingResult for the routers"""

    def __init__(self, rows):
        self._rows = rows

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)

    def first(self):
        return self._rows[0] if self._rows else None

    def scalar_one(self):
        return next(iter(self._rows[0].values()))


class FakeSession:
    """Records executed SQL and returns queued rows in order"""

    def __init__(self):
        self.results = []
        self.calls = []
        self.error = None
        self.commits = 0
        self.rollbacks = 0

    def queue(self, *rows):
        """Queue the rows returned by the next execute() call."""
        self.results.append(list(rows))

    def execute(self, statement, params=None):
        self.calls.append((str(statement), dict(params or {})))
        if self.error is not None:
            raise self.error
        rows = self.results.pop(0) if self.results else []
        return FakeResult(rows)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        pass

    @property
    def last_sql(self):
        return self.calls[-1][0]

    @property
    def last_params(self):
        return self.calls[-1][1]


@pytest.fixture
def db():
    return FakeSession()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
