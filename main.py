import sys
import logging
import argparse

import psycopg2
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from utils.csv_utils import CsvImportError

logger = logging.getLogger("connections_db")


# ============================================================
# COMMANDS
# Database modules are imported inside each command: building the engine
# can fail on a bad DATABASE_URL and main() reports that as exit code 1.
# ============================================================

def cmd_migrate(args):
    import database
    from migrations import apply_schema, apply_schema_sql

    if args.sql:
        apply_schema_sql()
    else:
        apply_schema(database.engine)
    print("Schema is up to date.")


def cmd_import_contacts(args):
    import database
    from contacts.service import import_contacts_from_csv

    with database.get_db(database.SessionLocal) as db:
        summary = import_contacts_from_csv(db, args.csv or settings.CSV_PATH)
    _print_summary("Connections", summary)


def cmd_import_companies(args):
    import database
    from companies.service import import_companies_from_csv

    with database.get_db(database.SessionLocal) as db:
        summary = import_companies_from_csv(db, args.csv or settings.COMPANIES_CSV_PATH)
    _print_summary("Companies", summary)


def cmd_sync_companies(args):
    import database
    from companies.service import sync_companies_from_contacts

    with database.get_db(database.SessionLocal) as db:
        result = sync_companies_from_contacts(db)
    print(
        f"Scanned {result['contacts_scanned']} contacts: "
        f"{result['companies_inserted']} companies inserted, "
        f"{result['companies_existing']} already present."
    )


def _print_summary(label, summary):
    print(
        f"{label} data imported from {summary['filename']}: "
        f"{summary['inserted']} inserted, {summary['skipped']} skipped "
        f"(of {summary['total_rows']} rows)."
    )


# ============================================================
# ENTRY POINT
# ============================================================

def build_parser():
    parser = argparse.ArgumentParser(
        prog="connections-db",
        description="Manage the contacts and companies tables",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate = subparsers.add_parser("migrate", help="Create the tables if they do not exist")
    migrate.add_argument(
        "--sql",
        action="store_true",
        help="Run schema.sql through psycopg2 instead of the SQLAlchemy models",
    )
    migrate.set_defaults(func=cmd_migrate)

    contacts = subparsers.add_parser("import-contacts", help="Import a connections CSV")
    contacts.add_argument("--csv", type=str, help="Path to the CSV (default: $CSV_PATH)")
    contacts.set_defaults(func=cmd_import_contacts)

    companies = subparsers.add_parser("import-companies", help="Import a companies CSV")
    companies.add_argument("--csv", type=str, help="Path to the CSV (default: $COMPANIES_CSV_PATH)")
    companies.set_defaults(func=cmd_import_companies)

    sync = subparsers.add_parser(
        "sync-companies",
        help="Insert placeholder companies for contact companies with no record",
    )
    sync.set_defaults(func=cmd_sync_companies)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except CsvImportError as e:
        logger.error("Import failed: %s", e)
        return 1
    except (SQLAlchemyError, psycopg2.Error) as e:
        logger.error("Database error: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
