"""Engine, schema and session setup for the local debt store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger("infra.database")

SessionFactory = Callable[[], ContextManager[Session]]


def create_db_engine(config: BaseConfig) -> Engine:
    """Build the engine for ``config.DATABASE_URL`` with the config's options."""
    return create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())


def init_database(engine: Engine) -> None:
    """Create the debt, check-in and setting tables if they are missing."""
    # Registers the table models on SQLModel.metadata
    from .. import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.debug("Schema ready", extra={"tables": sorted(SQLModel.metadata.tables)})


def create_session_factory(engine: Engine) -> SessionFactory:
    """Return a callable opening one unit of work per ``with`` block.

    The block commits on success and rolls back on any exception, which is
    then re-raised to the repository caller.
    """

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            logger.warning("Session rolled back", exc_info=True)
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: Optional[BaseConfig] = None) -> Tuple[Engine, SessionFactory]:
    """Create the engine, make sure the schema exists and return both with a session factory."""

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    logger.info("Database ready", extra={"database_url": cfg.DATABASE_URL})
    return engine, create_session_factory(engine)
