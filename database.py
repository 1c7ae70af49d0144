import os
import logging
import psycopg2
from psycopg2.extras import RealDictCursor
from contextlib import contextmanager
from dotenv import load_dotenv

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base

logger = logging.getLogger(__name__)

# Always load .env from the project folder
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./connections.db")
logger.debug("Using %s database", make_url(DATABASE_URL).get_backend_name())

# ============================================================
# SQLALCHEMY SETUP (Required for all models)
# ============================================================

# SQLAlchemy engine
engine = create_engine(DATABASE_URL)

# SQLAlchemy session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all SQLAlchemy models
Base = declarative_base()


# ============================================================
# RAW CONNECTION (psycopg2)
# Used to run the literal schema.sql against PostgreSQL.
# ============================================================

def get_db_connection():
    """
    Returns a psycopg2 connection WITHOUT context manager.
    The caller is responsible for closing it.
    """
    url = make_url(DATABASE_URL).set(drivername="postgresql")
    conn = psycopg2.connect(
        url.render_as_string(hide_password=False),
        cursor_factory=RealDictCursor
    )
    return conn


# ============================================================
# SESSION SCOPE
# ============================================================

@contextmanager
def get_db(session_factory=None):
    """
    Opens a SQLAlchemy session and closes it automatically.
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
    finally:
        db.close()
