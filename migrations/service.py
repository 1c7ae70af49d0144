import os
import logging

from database import Base, engine as default_engine, get_db_connection
import models  # noqa: F401  (registers Contact and Company on Base.metadata)

logger = logging.getLogger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "schema.sql")


# ============================================================
# APPLY SCHEMA (SQLAlchemy metadata)
# ============================================================

def apply_schema(engine=None):
    """
    Create the contacts and companies tables if they do not exist.

    Safe to call repeatedly: existing tables, and the rows in them, are left
    untouched. Any error raised by the store propagates unchanged.
    """
    engine = engine or default_engine
    tables = sorted(Base.metadata.tables)

    logger.info("Applying schema (%s) on %s", ", ".join(tables), engine.url.get_backend_name())
    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Schema applied")


# ============================================================
# APPLY SCHEMA (raw schema.sql via psycopg2)
# ============================================================

def apply_schema_sql(conn=None, schema_path=SCHEMA_PATH):
    """Run schema.sql in a single transaction on a PostgreSQL connection."""
    owns_conn = conn is None
    if owns_conn:
        conn = get_db_connection()

    try:
        with open(schema_path, "r") as f:
            ddl = f.read()

        cursor = conn.cursor()
        cursor.execute(ddl)
        conn.commit()
        logger.info("Executed %s", os.path.basename(schema_path))

    except Exception:
        conn.rollback()
        raise

    finally:
        if owns_conn:
            conn.close()
