import os
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from workbench.config import DATABASE_URL, LOG_LEVEL
from workbench.errors import ValidationError, StoreUnavailable
import logging

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# Only use connect_args if we are using SQLite
engine_args = {}
if DATABASE_URL.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
else:
    # Production settings for PostgreSQL
    engine_args.update({
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
    })

try:
    engine = create_engine(
        DATABASE_URL,
        **engine_args,
        echo=False,
    )
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
except Exception as e:
    logger.error(f"Failed to create engine: {e}")
    raise e

Base = declarative_base()


def get_db():
    """FastAPI dependency — yields a database session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create the data/ directory for SQLite files, then create all tables."""
    bind = bind or engine
    url = str(bind.url)
    if url.startswith("sqlite:///") and ":memory:" not in url:
        db_dir = os.path.dirname(url.replace("sqlite:///", "", 1))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    # Import all models so they register with Base.metadata
    from workbench.models.project import Project
    from workbench.models.task import Task

    Base.metadata.create_all(bind=bind)
    logger.info("Database initialized successfully.")


@contextmanager
def store_guard(db, action: str):
    """Roll back and re-raise store failures as typed errors; never retries."""
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"{action} rejected by the database: {e.orig}")
        raise ValidationError(f"{action} violates a database constraint") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{action} failed: {e}")
        raise StoreUnavailable(f"{action} failed: database unavailable") from e
