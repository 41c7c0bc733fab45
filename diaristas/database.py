import functools
import logging
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DB_MAX_OVERFLOW, DB_POOL_RECYCLE, DB_POOL_SIZE, DB_POOL_TIMEOUT
from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Handle on the relational store.

    Built once at process start and handed to the app factory. When no URL is
    configured the handle stays unavailable and every session request raises
    StoreUnavailableError, which get_db turns into a degraded (None) session.
    """

    def __init__(self, url: Optional[str]):
        self.url = url
        self.engine = None
        self._sessionmaker = None

        if not url:
            logger.warning("⚠️ DATABASE_URL not configured - running without a database")
            return

        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # Single shared connection so every session sees the same in-memory db
                kwargs["poolclass"] = StaticPool
        else:
            kwargs = {
                "pool_pre_ping": True,
                "pool_recycle": DB_POOL_RECYCLE,
                "pool_size": DB_POOL_SIZE,
                "max_overflow": DB_MAX_OVERFLOW,
                "pool_timeout": DB_POOL_TIMEOUT,
            }

        try:
            self.engine = create_engine(url, echo=False, **kwargs)
            logger.info("✅ Database engine created successfully")
        except Exception as e:
            logger.error(f"❌ Failed to create database engine: {e}")
            raise

        self._sessionmaker = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def available(self) -> bool:
        return self._sessionmaker is not None

    def session(self) -> Session:
        if not self.available:
            raise StoreUnavailableError("Database not configured")
        return self._sessionmaker()

    def create_all(self) -> None:
        if not self.available:
            logger.warning("⚠️ Skipping table creation: database not available")
            return
        # Import models so they register with Base
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine, checkfirst=True)


def get_db(request: Request):
    """Yield a session for the request, or None when the store is unavailable"""
    database: Database = request.app.state.database
    try:
        db = database.session()
    except StoreUnavailableError:
        yield None
        return
    try:
        yield db
    finally:
        db.close()


def degrade_when_unavailable(default=None):
    """
    Repository decorator for degraded mode.

    Expects the session as the first positional argument. When it is None the
    call is skipped with a warning and `default` is returned instead (a fresh
    copy when it is a list).
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(db: Optional[Session], *args, **kwargs):
            if db is None:
                logger.warning(f"⚠️ Cannot {func.__name__}: database not available")
                return list(default) if isinstance(default, list) else default
            return func(db, *args, **kwargs)

        return wrapper

    return decorator
