"""
Query Performance Monitoring

Logs slow record store queries so the availability and conflict lookups
can be indexed when they start to drag.
"""
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from shopmgr.core.settings import get_settings
from shopmgr.logging_config import get_logger

logger = get_logger(__name__)


def _truncate(statement: str, limit: int) -> str:
    return f"{statement[:limit]}{'...' if len(statement) > limit else ''}"


def setup_query_logging(engine: Engine) -> None:
    """
    Set up SQLAlchemy event listeners for query performance tracking.

    This should be called once per engine.
    """
    settings = get_settings()
    slow_threshold = settings.SLOW_QUERY_THRESHOLD
    warn_threshold = settings.WARN_QUERY_THRESHOLD

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Record query start time"""
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Record query end time and log slow queries."""
        total = time.perf_counter() - conn.info["query_start_time"].pop(-1)

        if total > slow_threshold:
            logger.error(
                f"SLOW QUERY ({total:.3f}s): {_truncate(statement, 500)}",
                extra={"duration_seconds": round(total, 3)},
            )
        elif total > warn_threshold:
            logger.warning(
                f"Slow query ({total:.3f}s): {_truncate(statement, 200)}",
                extra={"duration_seconds": round(total, 3)},
            )
