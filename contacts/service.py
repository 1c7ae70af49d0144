import os
import logging
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from models.contact import Contact
from contacts.schemas import ContactCreate, ContactCsvRow, ContactRead, REQUIRED_CSV_COLUMNS
from utils.csv_utils import read_csv_rows

logger = logging.getLogger(__name__)


# ============================================================
# CREATE CONTACT
# ============================================================

def create_contact(db: Session, contact_in: ContactCreate) -> Contact:
    contact = Contact(
        first_name=contact_in.first_name,
        last_name=contact_in.last_name,
        url=contact_in.url,
        email_address=contact_in.email_address,
        company=contact_in.company,
        position=contact_in.position,
    )
    db.add(contact)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(contact)
    return contact


# ============================================================
# CSV IMPORT
# ============================================================

def import_contacts_from_csv(db: Session, csv_path: str) -> dict:
    """
    Insert every row of a connections export into contacts.

    Rows are committed one by one; a row the database rejects is reported in
    the summary and the import carries on.
    """
    rows = read_csv_rows(csv_path, REQUIRED_CSV_COLUMNS)
    logger.info("Importing %d contacts from %s", len(rows), csv_path)

    inserted = skipped = 0
    errors = []

    for line_no, row in rows:
        try:
            record = ContactCsvRow.model_validate(
                {k: v for k, v in row.items() if k is not None}
            )
            contact = create_contact(db, record)
            logger.debug("Row %d imported: %s", line_no, ContactRead.model_validate(contact))
            inserted += 1

        except (DBAPIError, ValueError) as e:
            # ValueError covers pydantic ValidationError and NUL bytes psycopg2 refuses
            if isinstance(e, DBAPIError) and e.connection_invalidated:
                raise
            message = str(e).splitlines()[0][:120]
            logger.warning("Row %d skipped: %s", line_no, message)
            errors.append(f"Row {line_no}: {message}")
            skipped += 1

    logger.info("Connections data imported: %d inserted, %d skipped", inserted, skipped)

    return {
        "filename": os.path.basename(csv_path),
        "total_rows": len(rows),
        "inserted": inserted,
        "skipped": skipped,
        "errors": errors,
    }
