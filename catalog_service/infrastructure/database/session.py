from typing import Generator, Optional

from sqlalchemy import text
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from catalog_service.config.config import config
from catalog_service.config.logger_config import log
from catalog_service.infrastructure.database.models import CategoryDocument  # noqa: F401

# Global engine instance
engine = None


def build_engine(database_url: str):
    """
    Create an engine for `database_url`. SQLite URLs share one connection so
    an in-memory database survives across sessions.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=300,
        connect_args={"sslmode": "disable"},
    )


def init_sqlmodel(database_url: Optional[str] = None) -> None:
    """
    Initialize the SQLModel engine and create the catalog tables.
    Must be called before any database operations.
    """
    global engine
    if engine is not None:
        log.warning("Database engine already initialized. Skipping re-initialization.")
        return

    try:
        engine = build_engine(database_url or config.DATABASE_URL)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        SQLModel.metadata.create_all(engine)
        log.info("SQLModel engine initialized and connection verified")
    except Exception as e:
        log.critical(
            "Failed to initialize SQLModel engine", error=str(e), exc_info=True
        )
        engine = None
        raise RuntimeError("Failed to initialize database engine") from e


def dispose_engine() -> None:
    global engine
    if engine is not None:
        engine.dispose()
        engine = None


def ping() -> bool:
    """Return True when the database answers a trivial query."""
    if engine is None:
        return False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        log.warning("Database ping failed", error=str(e))
        return False


def get_session() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.
    Ensures proper cleanup after use.

    Yields:
        Session: An active SQLModel session.

    Raises:
        RuntimeError: If engine is not initialized.
    """
    if engine is None:
        log.critical("Database session requested, but engine is not initialized")
        raise RuntimeError(
            "Database engine not initialized. Call init_sqlmodel() first."
        )

    session = Session(engine)
    try:
        yield session
    except Exception as e:
        log.error("Database session error, rolling back", error=str(e))
        session.rollback()
        raise
    finally:
        session.close()
