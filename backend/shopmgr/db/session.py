"""
Database session management
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from shopmgr.core.settings import get_settings
from shopmgr.db.base import Base
from shopmgr.db.query_monitor import setup_query_logging
from shopmgr.logging_config import get_logger

logger = get_logger(__name__)


def enable_sqlite_savepoints(engine: Engine) -> None:
    """
    Let SQLAlchemy own BEGIN on pysqlite connections.

    The driver otherwise starts transactions lazily before DML, which makes a
    SAVEPOINT opened after plain SELECTs act as the outermost transaction and
    commit on RELEASE.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with slow-query logging attached."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_savepoints(engine)
    else:
        engine = create_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,  # Verify connections before using
            pool_recycle=3600,  # Recycle connections after 1 hour
        )
    setup_query_logging(engine)
    return engine


settings = get_settings()

engine = create_db_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
logger.info(
    f"Database engine created for {settings.PROJECT_NAME} {settings.VERSION}",
    extra={"dialect": engine.dialect.name, "environment": settings.ENVIRONMENT},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_database(bind: Engine = engine) -> None:
    """Create tables for all models (idempotent)."""
    import shopmgr.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ready")


def get_db():
    """
    Yield a session and always close it.

    Usage:
        for db in get_db():
            store = SqlAlchemyRecordStore(db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
