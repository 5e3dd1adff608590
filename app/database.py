from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings

DATABASE_URL = settings.database_url


def _build_engine(url: str):
    if url.startswith("postgresql"):
        return create_engine(url, pool_pre_ping=True, echo=settings.database_echo)
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, otherwise every checkout sees an empty database
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.database_echo,
        )
    return create_engine(url, connect_args={"check_same_thread": False}, echo=settings.database_echo)


engine = _build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Request-scoped session. Services own commit/rollback."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create any missing tables for the console's models."""
    from app.models import (  # noqa: F401
        employee, contractor, payroll, budget, leave_settlement,
        pending_approval, period_lock, audit_log, system_setting, reminder
    )
    Base.metadata.create_all(bind=engine)
