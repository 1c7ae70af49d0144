import os
import logging
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from models.company import Company
from models.contact import Contact
from companies.schemas import CompanyCreate, CompanyCsvRow, CompanyRead, REQUIRED_CSV_COLUMNS
from utils.csv_utils import read_csv_rows

logger = logging.getLogger(__name__)

PLACEHOLDER_WEBSITE = "https://placeholder.example.com"


# ============================================================
# CREATE COMPANY
# ============================================================

def create_company(db: Session, company_in: CompanyCreate) -> Company:
    company = Company(
        name=company_in.name,
        website=company_in.website,
        email=company_in.email,
        industry=company_in.industry,
    )
    db.add(company)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(company)
    return company


def company_exists(db: Session, name: str) -> bool:
    return db.query(Company.id).filter(Company.name == name).first() is not None


# ============================================================
# CSV IMPORT
# ============================================================

def import_companies_from_csv(db: Session, csv_path: str) -> dict:
    rows = read_csv_rows(csv_path, REQUIRED_CSV_COLUMNS)
    logger.info("Importing %d companies from %s", len(rows), csv_path)

    inserted = skipped = 0
    errors = []

    for line_no, row in rows:
        try:
            record = CompanyCsvRow.model_validate(
                {k: v for k, v in row.items() if k is not None}
            )

            # Check duplicates
            if company_exists(db, record.name):
                errors.append(f"Row {line_no}: Skipped duplicate company '{record.name}'")
                skipped += 1
                continue

            company = create_company(db, record)
            logger.debug("Row %d imported: %s", line_no, CompanyRead.model_validate(company))
            inserted += 1

        except (DBAPIError, ValueError) as e:
            if isinstance(e, DBAPIError) and e.connection_invalidated:
                raise
            db.rollback()
            errors.append(f"Row {line_no}: {str(e).splitlines()[0][:120]}")
            skipped += 1

    for error in errors:
        logger.warning(error)
    logger.info("Companies data imported: %d inserted, %d skipped", inserted, skipped)

    return {
        "filename": os.path.basename(csv_path),
        "total_rows": len(rows),
        "inserted": inserted,
        "skipped": skipped,
        "errors": errors,
    }


# ============================================================
# SYNC COMPANIES FROM CONTACTS
# ============================================================

def sync_companies_from_contacts(db: Session) -> dict:
    """
    Give every company named by a contact a row in companies.

    Names with no match get a placeholder website. contacts.company stays
    free text: nothing links the two tables afterwards.
    """
    names = [
        row.company
        for row in db.query(Contact.company).distinct().order_by(Contact.company).all()
    ]
    logger.info("Found %d distinct contact companies to process", len(names))

    inserted = existing = 0
    try:
        for name in names:
            if not name.strip():
                logger.warning("Contacts with an empty 'company' field; skipping")
                continue

            if company_exists(db, name):
                logger.debug("Found existing company '%s'", name)
                existing += 1
                continue

            logger.info("No existing record for company '%s'; inserting placeholder", name)
            db.add(Company(name=name, website=PLACEHOLDER_WEBSITE))
            db.flush()
            inserted += 1

        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info("Inserted %d companies, %d already existed", inserted, existing)

    return {
        "contacts_scanned": db.query(Contact).count(),
        "companies_inserted": inserted,
        "companies_existing": existing,
    }
