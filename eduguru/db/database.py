# /eduguru/db/database.py

import logging

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker

from ..core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **overrides):
    """Creates an engine with the dialect-specific options the app relies on."""
    engine_args = {}
    if database_url.startswith("sqlite"):
        # The 'check_same_thread' argument is only needed for SQLite.
        engine_args["connect_args"] = {"check_same_thread": False}
    else:
        engine_args["pool_pre_ping"] = True
        if settings.db_ssl:
            engine_args["connect_args"] = {"sslmode": "require"}

    engine_args.update(overrides)
    engine = create_engine(database_url, **engine_args)

    if database_url.startswith("sqlite"):
        # SQLite ignores ON DELETE clauses unless foreign keys are switched on
        # per connection.
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.database_url)

# Each instance of this class is one database session (one pooled connection).
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_database(bind=None) -> bool:
    """
    Creates missing tables and checks the connection with a trivial query.
    Returns False instead of raising so the app can still boot in demo mode.
    """
    from .base import Base

    bind = bind or engine
    try:
        Base.metadata.create_all(bind=bind)
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database tables initialized successfully.")
        return True
    except Exception:
        logger.exception("Database initialization failed; continuing in demo mode.")
        return False


def check_connection(bind=None) -> bool:
    bind = bind or engine
    try:
        with bind.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("Database health check failed.", exc_info=True)
        return False


# Dependency to get a DB session. This will be used in our API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
