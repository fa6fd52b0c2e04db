import pytest
from sqlalchemy import func, select

from toronto_time import create_app
from toronto_time.db import open_database
from toronto_time.models import Base, TimeLog


@pytest.fixture
def session_factory(tmp_path):
    """File-backed SQLite so several threads can write to the same table."""
    factory = open_database(
        f"sqlite:///{tmp_path / 'toronto_time.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(factory.kw["bind"])
    yield factory
    factory.kw["bind"].dispose()


@pytest.fixture
def app(session_factory, tmp_path):
    app = create_app(session_factory, config={
        "TESTING": True,
        "LOG_FILE": str(tmp_path / "application.log"),
    })
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def row_count(session_factory):
    def count():
        with session_factory() as db:
            return db.execute(select(func.count()).select_from(TimeLog)).scalar_one()
    return count
