"""Shared fixtures: a fresh in-memory registry per test."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import create_db_engine, get_db, init_db
from main import app
from Services.booking_service import RideBookingService


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def service(db):
    return RideBookingService(db)


@pytest.fixture
def seeded_service(service):
    service.seed_demo_data()
    return service


@pytest.fixture
def client(session_factory):
    seed_session = session_factory()
    RideBookingService(seed_session).seed_demo_data()
    seed_session.close()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
