"""Process-scoped database state: one engine, lazily initialized, one teardown path."""

from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from todostore.entity.base import Base
from todostore.exceptions import BackendUnavailable, ValidationFailed

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def _create_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees a fresh empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def init_db(database_url: str) -> Engine:
    """Connect and create the schema. Re-initializing replaces the previous engine."""
    global _engine, _session_factory
    if _engine is not None:
        close_db()
    # imported for table registration
    from todostore.entity import tag, todo  # noqa: F401
    engine = _create_engine(database_url)
    try:
        Base.metadata.create_all(engine)
    except OperationalError as e:
        engine.dispose()
        raise BackendUnavailable(f"Cannot open database: {e}") from e
    _engine = engine
    _session_factory = sessionmaker(bind=engine, expire_on_commit=False)
    logger.info("database initialized: {}", engine.url.render_as_string(hide_password=True))
    return engine


def is_initialized() -> bool:
    return _engine is not None


def close_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        logger.debug("database closed")
    _engine = None
    _session_factory = None


@contextmanager
def get_db() -> Iterator[Session]:
    """Transactional session: commits on success, rolls back on any error."""
    if _session_factory is None:
        raise BackendUnavailable("Database is not initialized")
    session = _session_factory()
    try:
        yield session
        session.commit()
    except OperationalError as e:
        session.rollback()
        raise BackendUnavailable(str(e)) from e
    except IntegrityError as e:
        session.rollback()
        raise ValidationFailed(f"Conflicting record: {e.orig}") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
