# Database Configuration and Session Management

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from config.app_config import (
    DATABASE_URL,
    DB_CONNECT_RETRIES,
    DB_RETRY_BASE_DELAY,
    DB_RETRY_MAX_DELAY,
)
from core.errors import StorageError

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so every session sees the same in-memory database
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


def retry_delay(attempt: int, base_delay: float = DB_RETRY_BASE_DELAY,
                max_delay: float = DB_RETRY_MAX_DELAY) -> float:
    """Exponential backoff: base * 2^attempt, capped at max_delay."""
    return min(base_delay * (2 ** attempt), max_delay)


class Database:
    """
    Owns the engine and session factory for one application instance.
    Created by the app factory and reached through ``app.state.database``.
    """

    def __init__(self, url: str = DATABASE_URL, echo: bool = False):
        self.url = url
        self.engine = create_engine(url, echo=echo, **_engine_options(url))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def wait_until_ready(
        self,
        retries: int = DB_CONNECT_RETRIES,
        base_delay: float = DB_RETRY_BASE_DELAY,
        max_delay: float = DB_RETRY_MAX_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Block until the database answers, retrying with exponential backoff."""
        last_error: Optional[Exception] = None
        for attempt in range(retries + 1):
            try:
                with self.engine.connect() as connection:
                    connection.execute(text("SELECT 1"))
                if attempt:
                    logger.info(f"Database connection established after {attempt} retries")
                return
            except OperationalError as e:
                last_error = e
                if attempt == retries:
                    break
                delay = retry_delay(attempt, base_delay, max_delay)
                logger.warning(f"Database not ready (attempt {attempt + 1}/{retries + 1}), retrying in {delay:.1f}s")
                sleep(delay)

        logger.error(f"Database unreachable after {retries + 1} attempts: {last_error}")
        raise StorageError("Database unavailable") from last_error

    def init_db(self) -> None:
        """Create all tables that do not exist yet."""
        from database.models import Base
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    @contextmanager
    def session(self):
        """
        Context manager for database session.
        Usage:
        with database.session() as db:
            # do something with db
        """
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


# Dependency for FastAPI
def get_db(request: Request) -> Session:
    """
    FastAPI dependency to get database session.
    Usage: db: Session = Depends(get_db)
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
