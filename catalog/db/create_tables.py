"""Create the catalog schema, on startup or from the command line."""
from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from .session import Base, get_engine
from . import models  # noqa: F401  # registers Movie on Base.metadata

logger = logging.getLogger(__name__)


def create_all() -> list[str]:
    """Create missing tables. Returns the names of tables that were created."""
    engine = get_engine()
    existing = set(inspect(engine).get_table_names())
    Base.metadata.create_all(bind=engine)
    created = sorted(set(Base.metadata.tables) - existing)
    if created:
        logger.info("Created tables: %s", ", ".join(created))
    else:
        logger.debug("Catalog schema already present")
    return created


if __name__ == "__main__":
    from catalog.core.log import configure_logging

    configure_logging()
    try:
        create_all()
    except SQLAlchemyError as exc:
        logger.error("Failed to create tables: %s", exc)
        raise SystemExit(1) from exc
