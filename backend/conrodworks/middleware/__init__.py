"""
Middleware package for the ConrodWorks backend.
"""
from .query_monitor import QueryPerformanceMonitor, setup_query_logging
from .security import SecurityHeadersMiddleware

__all__ = ["QueryPerformanceMonitor", "setup_query_logging", "SecurityHeadersMiddleware"]
