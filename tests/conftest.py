import pytest
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from app.database import Base, get_db
from app.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """
    Session joined to an outer transaction that is rolled back after each
    test, so service-level commits never leak between tests.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection, join_transaction_mode="rollback_only")

    yield session

    session.close()
    if transaction.is_active:
        transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def actor():
    from app.core.schemas import ActorContext
    return ActorContext(user_id="u-1", user_name="Test Admin", ip_address="10.0.0.1", user_agent="pytest")

@pytest.fixture(scope="function")
def employee(db_session):
    from app.models.employee import Employee
    emp = Employee(
        name="Sara Ahmed",
        position="Editor",
        base_salary=10000,
        social_insurance=900,
        leave_balance=5,
        sort_order=1,
        is_active=True,
    )
    db_session.add(emp)
    db_session.commit()
    return emp

@pytest.fixture(scope="function")
def contractor(db_session):
    from app.models.contractor import Contractor
    con = Contractor(name="Omar Khalid", position="Photographer", salary=4000, is_active=True)
    db_session.add(con)
    db_session.commit()
    return con

@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
