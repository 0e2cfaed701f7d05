# Database engine, session factory and declarative base
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from user_portal.core.config import settings

LOGGER = logging.getLogger(__name__)


def _engine_kwargs(url: str) -> dict:
    kwargs = {"echo": settings.SQL_ECHO}
    if url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            # one shared connection, otherwise every checkout gets an empty db
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return kwargs


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

Base = declarative_base()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    # register models on Base.metadata
    from user_portal.models import user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    LOGGER.info("Database schema ready")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
