"""
Shared test fixtures for ConrodWorks tests

Provides database setup, client creation, and shop-floor fixtures
(recipe, component stock, assembled conrods, customer)
"""
import os

# Must be set before the app (and its settings singleton) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["LOG_FORMAT"] = "text"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from conrodworks.main import app
from conrodworks.db.base import Base
from conrodworks.db.session import get_db

from tests.factories import (
    reset_sequences,
    create_test_conrod,
    create_test_pin,
    create_test_ball_bearing,
    create_test_assembly,
    create_test_customer,
)


# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(engine):
    """Create all tables for testing using SQLAlchemy metadata"""
    # Registers every model with Base
    import conrodworks.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables(engine):
    """Drop all tables after testing"""
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _reset_factory_sequences():
    reset_sequences()
    yield


@pytest.fixture
def db_session():
    """Create a fresh database session for each test"""
    create_tables(engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        drop_tables(engine)


@pytest.fixture
def db(db_session):
    """Short alias for db_session"""
    return db_session


@pytest.fixture
def client(db_session):
    """Create a test client with database override"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Shop floor fixtures
# =============================================================================

@pytest.fixture
def sample_recipe(db_session):
    """Yamaha YZF-R15 recipe: PIN-YZF-002 (7) + BB-6200-2RS (NRB, 7)"""
    recipe = create_test_conrod(
        db_session,
        serial_number="CR002",
        conrod_name="Yamaha YZF-R15 Conrod",
        conrod_variant="NRB",
        conrod_size="7",
        small_end_diameter=14.8,
        big_end_diameter=40.5,
        center_distance=108.2,
        pin_name="PIN-YZF-002",
        pin_size="7",
        ball_bearing_name="BB-6200-2RS",
        ball_bearing_variant="NRB",
        ball_bearing_size="7",
        amount=5,
    )
    db_session.commit()
    return recipe


@pytest.fixture
def pin_stock(db_session, sample_recipe):
    """40 pins matching sample_recipe"""
    pin = create_test_pin(db_session, name="PIN-YZF-002", size="7", quantity=40)
    db_session.commit()
    return pin


@pytest.fixture
def ball_bearing_stock(db_session, sample_recipe):
    """25 ball bearings matching sample_recipe"""
    bearing = create_test_ball_bearing(
        db_session, name="BB-6200-2RS", variant="NRB", size="7", quantity=25
    )
    db_session.commit()
    return bearing


@pytest.fixture
def assembly_stock(db_session):
    """12 finished Yamaha conrods ready to invoice"""
    assembly = create_test_assembly(
        db_session, name="Yamaha YZF-R15 Conrod", variant="NRB", size="7", quantity=12
    )
    db_session.commit()
    return assembly


@pytest.fixture
def sample_customer(db_session):
    customer = create_test_customer(
        db_session,
        name="John Smith",
        address="123 Main St, New York, NY 10001",
        phone_number="(555) 123-4567",
        gst_no="GST123456789",
    )
    db_session.commit()
    return customer
