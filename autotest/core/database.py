import os
import tempfile
from pathlib import Path
from typing import Generator

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from autotest.config.settings import settings

logger = structlog.get_logger()

SQLITE_FALLBACK_FILE = "autotest_fallback.db"


def _resolve_database_url(database_url: str) -> str:
    """Create the directory of a sqlite file; use a temp-dir database if it cannot be written."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or url.database in (None, "", ":memory:"):
        return database_url

    directory = Path(url.database).resolve().parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Cannot create sqlite directory", directory=str(directory), error=str(e))
    if os.access(directory, os.W_OK):
        return database_url

    fallback = f"sqlite:///{(Path(tempfile.gettempdir()) / SQLITE_FALLBACK_FILE).as_posix()}"
    logger.error("Sqlite directory is not writable, using temp database", directory=str(directory), fallback=fallback)
    return fallback


database_url = _resolve_database_url(settings.database_url)
engine = create_engine(
    database_url,
    connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
    echo=settings.debug,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_database() -> Generator[Session, None, None]:
    """Request-scoped session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables():
    from autotest.models.database import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready", url=engine.url.render_as_string(hide_password=True))
