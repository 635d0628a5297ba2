import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from app.db.engine import get_engine


@pytest.fixture()
def db_url(tmp_path, monkeypatch):
    # Every test gets its own throwaway SQLite file
    url = f"sqlite:///{tmp_path / 'dashboard_test.sqlite'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


@pytest.fixture()
def engine(db_url):
    engine = get_engine()
    yield engine
    engine.dispose()


@pytest.fixture()
def client(db_url):
    from app.main import app
    return TestClient(app)


@pytest.fixture()
def count_rows(engine):
    def _count(table) -> int:
        with engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar_one()
    return _count
