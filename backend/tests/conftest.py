"""Shared fixtures: an in-memory SQLite database and an API client bound to it."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import bandwidth_billing.models  # noqa: F401
from bandwidth_billing.database import Base, get_db
from bandwidth_billing.main import app
from bandwidth_billing.models import BandwidthClient, BandwidthItem, BandwidthProvider
from bandwidth_billing.services.counterparty_service import counterparty_service

TENANT = "tenant-a"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, headers={"X-Tenant-ID": TENANT}) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def provider(db_session):
    return counterparty_service.create(BandwidthProvider, TENANT, {"name": "Summit Communications"}, db_session)


@pytest.fixture
def bandwidth_client(db_session):
    return counterparty_service.create(BandwidthClient, TENANT, {"name": "Dhaka Net", "pop_name": "POP-Mirpur"}, db_session)


@pytest.fixture
def catalog_item(db_session):
    item = BandwidthItem(tenant_id=TENANT, name="IIG Bandwidth", unit="Mbps", unit_price=500)
    db_session.add(item)
    db_session.commit()
    db_session.refresh(item)
    return item
