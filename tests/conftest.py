import os

# Settings are read at import time; keep the module engine in memory
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from task_service.core.database import Base, get_db
from task_service.main import app
from task_service.models.task import Task  # noqa: F401
from task_service.repositories.task_repository import TaskRepository
from task_service.services.task_service import TaskService


@pytest.fixture()
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def repository(db_session) -> TaskRepository:
    return TaskRepository(db_session)


@pytest.fixture()
def service(repository) -> TaskService:
    return TaskService(repository)


@pytest.fixture()
def override_db(session_factory):
    """Route the app's get_db dependency to the test database"""
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def client(override_db) -> TestClient:
    return TestClient(app)
