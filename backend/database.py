# backend/database.py
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings

logger = logging.getLogger(__name__)


def _normalize_url(url: str) -> str:
    # Hosted Postgres still hands out postgres://, SQLAlchemy wants postgresql://
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def make_engine(url: str, **kwargs) -> Engine:
    url = _normalize_url(url)

    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    elif "poolclass" not in kwargs:
        kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
        kwargs.setdefault("max_overflow", settings.DB_MAX_OVERFLOW)
        kwargs.setdefault("pool_timeout", settings.DB_POOL_TIMEOUT)
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_engine(url, echo=settings.DB_ECHO, **kwargs)

    if engine.dialect.name == "sqlite":
        # SQLite leaves foreign keys off per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False, expire_on_commit=False)


SQLALCHEMY_DATABASE_URL = _normalize_url(settings.DATABASE_URL)

engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = make_session_factory(engine)

Base = declarative_base()


def init_db(bind: Engine = None):
    # Import models so every table is registered on Base.metadata
    import models  # noqa: F401

    target = bind or engine
    logger.info("Creating tables on %s", target.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=target)
