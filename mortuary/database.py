# mortuary/database.py
"""
Database handle, session management, and table creation.

A Database is built once at process start and kept on ``app.state``;
request handlers get sessions through the get_db() dependency.
PostgreSQL in production, SQLite for tests and local runs.
"""

from contextlib import contextmanager

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from mortuary.utils.logger import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class Database:
    """Owns one engine and its session factory."""

    def __init__(self, url: str, pool_size: int = 10, max_overflow: int = 20, echo: bool = False):
        self.url = url
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise each session sees an empty DB
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
                "pool_size": pool_size,
                "max_overflow": max_overflow,
            }
        self.engine = create_engine(url, echo=echo, **kwargs)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def create_tables(self):
        """
        Creates all tables. Safe to call multiple times.
        Models are imported here so SQLAlchemy knows about them.
        """
        from mortuary.models.staff_user import StaffUser           # noqa
        from mortuary.models.chamber import Chamber                 # noqa
        from mortuary.models.deceased import DeceasedRecord         # noqa
        from mortuary.models.next_of_kin import NextOfKin           # noqa
        from mortuary.models.service import Service                 # noqa
        from mortuary.models.release_record import ReleaseRecord    # noqa

        Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        self.engine.dispose()
        logger.info("Database connections closed")


def get_db(request: Request):
    """FastAPI dependency — yields a DB session and closes it after request."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Commit on success; roll back and re-raise on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
