"""Database infrastructure: engine, schema and session scopes."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..errors import ConstraintViolationError, StoreTimeoutError, StoreUnavailableError


def create_db_engine(config: BaseConfig):
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    return create_engine(config.DATABASE_URL, **engine_options)


def init_database(engine) -> None:
    """Create any missing tables."""
    from .. import models  # noqa: F401  # registers tables with SQLModel metadata

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine):
    """Return a factory producing transactional session scopes."""

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@contextmanager
def translate_store_errors() -> Iterator[None]:
    """Re-raise SQLAlchemy failures as application store errors."""

    try:
        yield
    except IntegrityError as exc:
        raise ConstraintViolationError(str(exc.orig)) from exc
    except PoolTimeoutError as exc:
        raise StoreTimeoutError(str(exc)) from exc
    except OperationalError as exc:
        message = str(exc.orig)
        if "locked" in message or "timeout" in message.lower():
            raise StoreTimeoutError(message) from exc
        raise StoreUnavailableError(message) from exc
    except (DBAPIError, SQLAlchemyError) as exc:
        raise StoreUnavailableError(str(exc)) from exc
