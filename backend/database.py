# backend/database.py
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    # SQLAlchemy requires postgresql:// instead of the postgres:// form some hosts hand out
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Owns the engine and the session factory.

    Created from settings, connected on application startup and disposed on
    shutdown. Nothing in the package keeps a module-level engine.
    """

    def __init__(self, url: str, timeout: float = 5.0):
        self.url = normalize_database_url(url)
        self.timeout = timeout
        self.engine = None
        self.SessionLocal = None

    def connect(self):
        engine_kwargs = {}
        if self.url.startswith("sqlite"):
            connect_args = {"check_same_thread": False, "timeout": self.timeout}
            if _is_memory_sqlite(self.url):
                # A single shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
            else:
                engine_kwargs["pool_timeout"] = self.timeout
        elif self.url.startswith("postgresql"):
            connect_args = {"connect_timeout": max(1, int(self.timeout))}
            engine_kwargs["pool_timeout"] = self.timeout
        else:
            connect_args = {}
            engine_kwargs["pool_timeout"] = self.timeout

        self.engine = create_engine(self.url, connect_args=connect_args, **engine_kwargs)
        if self.url.startswith("sqlite"):
            # SQLite ignores foreign keys unless each connection turns them on
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.init_db()
        logger.info("Connected to database %s", self.engine.url.render_as_string(hide_password=True))

    def init_db(self):
        # Register every model on Base.metadata before creating tables
        import models.buyer  # noqa: F401
        import models.supplier  # noqa: F401
        import models.category  # noqa: F401
        import models.pickup_point  # noqa: F401
        import models.product  # noqa: F401
        import models.cart  # noqa: F401
        import models.order  # noqa: F401
        import models.log  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database is not connected")
        return self.SessionLocal()

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connection pool disposed")
        self.engine = None
        self.SessionLocal = None


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
