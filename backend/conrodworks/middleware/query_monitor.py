"""
Query Performance Monitoring Middleware

Counts and times the SQL issued while serving each request and logs slow
requests and slow statements. Thresholds come from settings
(SLOW_QUERY_THRESHOLD logs as ERROR, WARN_QUERY_THRESHOLD as WARNING).
"""
import time
import logging
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy import event
from sqlalchemy.engine import Engine

from conrodworks.core.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class QueryStats:
    """Per-request query counters"""
    count: int = 0
    total_time: float = 0.0
    slow_queries: List[Tuple[str, float]] = field(default_factory=list)


# Set by the middleware; the cursor listeners add to whatever is current
_current_stats: ContextVar[Optional[QueryStats]] = ContextVar("query_stats", default=None)


def _truncate(sql: str, limit: int) -> str:
    return f"{sql[:limit]}{'...' if len(sql) > limit else ''}"


class QueryPerformanceMonitor(BaseHTTPMiddleware):
    """
    Middleware to monitor query performance during HTTP requests.

    Tracks:
    - Total query count per request
    - Total query time per request
    - Individual slow queries

    Adds X-Query-Count, X-Query-Time and X-Total-Time response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        stats = QueryStats()
        token = _current_stats.set(stats)
        try:
            start_time = time.time()
            response = await call_next(request)
            total_time = time.time() - start_time
        finally:
            _current_stats.reset(token)

        if stats.total_time > settings.WARN_QUERY_THRESHOLD or stats.slow_queries:
            log_level = (
                logging.ERROR if stats.total_time > settings.SLOW_QUERY_THRESHOLD else logging.WARNING
            )
            logger.log(
                log_level,
                f"Request performance: {request.method} {request.url.path} | "
                f"Total: {total_time:.3f}s | Queries: {stats.count} ({stats.total_time:.3f}s) | "
                f"Slow queries: {len(stats.slow_queries)}"
            )

        response.headers["X-Query-Count"] = str(stats.count)
        response.headers["X-Query-Time"] = f"{stats.total_time:.3f}"
        response.headers["X-Total-Time"] = f"{total_time:.3f}"

        return response


def setup_query_logging(engine: Engine):
    """
    Attach cursor listeners for query timing to `engine`.

    Call once at startup.
    """

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        duration = time.time() - conn.info["query_start_time"].pop(-1)

        if duration > settings.SLOW_QUERY_THRESHOLD:
            logger.error(f"SLOW QUERY ({duration:.3f}s): {_truncate(statement, 500)}")
        elif duration > settings.WARN_QUERY_THRESHOLD:
            logger.warning(f"Slow query ({duration:.3f}s): {_truncate(statement, 200)}")

        stats = _current_stats.get()
        if stats is not None:
            stats.count += 1
            stats.total_time += duration
            if duration > settings.WARN_QUERY_THRESHOLD:
                stats.slow_queries.append((statement, duration))
