"""
Database session management
"""
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from conrodworks.core.settings import settings
from conrodworks.logging_config import get_logger

logger = get_logger(__name__)

connection_string = settings.database_url

connect_args = {}
if settings.is_sqlite:
    # FastAPI runs sync endpoints in a threadpool
    connect_args["check_same_thread"] = False

logger.info(f"Database connection: {connection_string.split('@')[-1]}")

engine = create_engine(
    connection_string,
    echo=settings.SQL_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)


if settings.is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """
    Dependency for getting database session

    Usage in FastAPI endpoints:
        @router.get("/customers")
        def list_customers(db: Session = Depends(get_db)):
            return db.query(Customer).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session):
    """
    Commit on success, roll back on any exception.

    Services only add and flush; the endpoint wraps the whole request in one
    of these so stock changes and their activity log rows land together.

    Usage:
        with unit_of_work(db):
            result = create_assembly(db, ...)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
