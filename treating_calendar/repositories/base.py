# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Shared helpers for the SQLAlchemy repositories."""
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from treating_calendar.core.errors import PersistenceError
from treating_calendar.core.logging import get_logger
from treating_calendar.metrics import PERSISTENCE_ERRORS

logger = get_logger(__name__)


@contextmanager
def persistence_guard(operation: str) -> Iterator[None]:
    """Translate driver errors into PersistenceError so callers see one type."""
    try:
        yield
    except SQLAlchemyError as exc:
        PERSISTENCE_ERRORS.labels(operation=operation).inc()
        logger.error("Database error during %s: %s", operation, exc)
        raise PersistenceError(f"Database error during {operation}") from exc
