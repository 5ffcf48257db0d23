# app/database.py
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Engine setup
#
# Postgres:
#   - sslmode=require   : enforce SSL when running in the cloud
#   - pool_pre_ping=True: validate connections before using them
#
# SQLite (local dev / tests):
#   - check_same_thread=False: sync FastAPI routes run in a thread pool,
#     so a connection may be used from a different thread than the one
#     that opened it.
# ---------------------------------------------------------

db_url = settings.DATABASE_URL

if db_url.startswith("sqlite"):
    engine = create_engine(
        db_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )
else:
    # Append sslmode=require if it is not already present
    if db_url.startswith("postgres") and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    engine = create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
    )


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
