# apps/core/adapters/orm.py
import logging
from contextlib import contextmanager

from django.db import DatabaseError

from apps.core.errors import PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def backend_call(operation: str):
    """Zamienia błędy bazy (DatabaseError) na PersistenceError z nazwą operacji."""
    try:
        yield
    except DatabaseError as e:
        logger.error("Backend operation '%s' failed: %s", operation, e)
        raise PersistenceError(f"{operation} failed: {e}") from e
