import logging
from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError, OperationalError, TimeoutError as PoolTimeoutError

from services.errors import UnavailableError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str):
    """Translate driver timeouts and lost connections into UnavailableError."""
    try:
        yield
    except (OperationalError, PoolTimeoutError) as exc:
        logger.error("Storage unavailable during %s: %s", operation, exc)
        raise UnavailableError(f"Storage unavailable during {operation}") from exc
    except DBAPIError as exc:
        if exc.connection_invalidated:
            logger.error("Connection lost during %s: %s", operation, exc)
            raise UnavailableError(f"Connection lost during {operation}") from exc
        raise
