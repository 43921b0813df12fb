"""
ConrodWorks - Main FastAPI Application
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime

from conrodworks.api.v1 import router as api_v1_router
from conrodworks.core.settings import settings
from conrodworks.db.session import engine
from conrodworks.exceptions import ConrodWorksException
from conrodworks.logging_config import setup_logging, get_logger
from conrodworks.middleware import (
    QueryPerformanceMonitor,
    SecurityHeadersMiddleware,
    setup_query_logging,
)

# Setup structured logging
setup_logging()
logger = get_logger(__name__)

setup_query_logging(engine)


def init_database():
    """Initialize database tables on startup (idempotent)."""
    from conrodworks.db.base import Base
    import conrodworks.models  # noqa: F401
    logger.info("Checking database tables...")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.error("Database initialization failed", exc_info=True)
        raise
    logger.info("Database tables ready")


def seed_default_data():
    """Insert demo recipes and customers into an empty database."""
    if not settings.SEED_DEMO_DATA:
        logger.info("Demo data seeding disabled")
        return

    from conrodworks.db.session import SessionLocal
    from conrodworks.services.seed_service import seed_demo_data
    db = SessionLocal()
    try:
        created = seed_demo_data(db)
        if not any(created.values()):
            logger.info("Existing data found - demo seed skipped")
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Could not seed demo data: {e}")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        "Starting ConrodWorks API",
        extra={
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG,
        }
    )
    init_database()
    seed_default_data()
    yield
    logger.info("Shutting down ConrodWorks API")


# Create FastAPI app
app = FastAPI(
    title="ConrodWorks API",
    description="Conrod recipes, component stock, assembly and billing",
    version=settings.VERSION,
    lifespan=lifespan,
)

# Query timing (innermost, so it sees only endpoint work)
app.add_middleware(QueryPerformanceMonitor)

# Security headers middleware
app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    expose_headers=["X-Query-Count", "X-Query-Time", "X-Total-Time"],
)


# ===================
# Exception Handlers
# ===================

def _timestamp() -> str:
    return datetime.utcnow().isoformat() + "Z"


@app.exception_handler(ConrodWorksException)
async def conrodworks_exception_handler(request: Request, exc: ConrodWorksException):
    logger.warning(
        f"ConrodWorks Exception: {exc.error_code} - {exc.message}",
        extra={"error_code": exc.error_code, "details": exc.details, "path": request.url.path}
    )
    error_dict = exc.to_dict()
    error_dict["timestamp"] = _timestamp()
    return JSONResponse(status_code=exc.status_code, content=error_dict)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        errors.append({"field": field, "message": error["msg"], "type": error["type"]})
    logger.warning("Validation error on %s", request.url.path, extra={"errors": errors})
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": errors},
            "timestamp": _timestamp(),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "DATABASE_ERROR",
            "message": "A database error occurred. Please try again.",
            "timestamp": _timestamp(),
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
            "timestamp": _timestamp(),
        },
    )


# Include API routes
app.include_router(api_v1_router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": "ConrodWorks API", "version": settings.VERSION, "status": "online"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("conrodworks.main:app", host="0.0.0.0", port=8001, reload=settings.DEBUG)
