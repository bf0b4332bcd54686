import os
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set required environment variables for testing
os.environ["API_V1_STR"] = "/api/v1"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["GEMINI_API_KEY"] = ""

from roomiesync.main import app
from roomiesync.database import get_db
from roomiesync.models.base import Base
from roomiesync.seed import INITIAL_ROOMMATES

TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="session")
def engine():
    """Create a test database engine for the entire test session."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine):
    """
    Create a new database session for each test.
    Automatically rolls back changes after each test.
    """
    connection = engine.connect()
    transaction = connection.begin()

    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=connection
    )
    session = TestingSessionLocal()

    def override_get_db():
        try:
            yield session
        finally:
            pass  # Closed after the test

    app.dependency_overrides[get_db] = override_get_db
    yield session

    session.close()
    transaction.rollback()
    connection.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(db_session):
    """Create a FastAPI TestClient with database session override."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded_roommates(db_session):
    """The three example roommates stored in the test database."""
    from roomiesync.models.roommate import Roommate

    for roommate in INITIAL_ROOMMATES:
        db_session.add(Roommate(**roommate.model_dump()))
    db_session.commit()
    return INITIAL_ROOMMATES


@pytest.fixture
def alice():
    return INITIAL_ROOMMATES[0]


@pytest.fixture
def bob():
    return INITIAL_ROOMMATES[1]


@pytest.fixture
def charlie():
    return INITIAL_ROOMMATES[2]


@pytest.fixture
def storage_dir(tmp_path):
    """Empty directory for a LocalStorage instance."""
    return tmp_path / "roomiesync"
