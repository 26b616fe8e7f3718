import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobtolk.config import settings
from jobtolk.database import get_db
from jobtolk.main import app


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def tmp_data_dir(tmp_path):
    data_dir = tmp_path / "JobTolk"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def test_db(tmp_data_dir):
    db_path = tmp_data_dir / "jobtolk.sqlite"
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    from jobtolk.database import init_db
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    yield session
    session.close()


@pytest.fixture
def client(tmp_data_dir, test_db):
    original_data_dir = settings.data_dir
    settings.data_dir = tmp_data_dir
    c = TestClient(app)
    yield c
    settings.data_dir = original_data_dir
