"""
Tests for company creation, the companies CSV importer and company sync.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError

import companies.service
from companies.schemas import CompanyCreate, CompanyRead
from companies.service import (
    PLACEHOLDER_WEBSITE,
    create_company,
    import_companies_from_csv,
    sync_companies_from_contacts,
)
from models import Company, Contact
from utils.csv_utils import CsvImportError


HEADER = "Name,Website,Email,Industry\n"


def _add_contact(db, company, first_name="Jane"):
    db.add(Contact(
        first_name=first_name,
        last_name="Doe",
        url=f"{first_name.lower()}.test",
        company=company,
        position="Engineer",
    ))
    db.commit()


class TestCreateCompany:

    def test_scenario_duplicate_name(self, db):
        acme = create_company(db, CompanyCreate(name="Acme", website="acme.test"))
        assert CompanyRead.model_validate(acme).id == 1

        with pytest.raises(IntegrityError):
            create_company(db, CompanyCreate(name="Acme", website="other.test"))

        companies = db.scalars(select(Company)).all()
        assert [(c.name, c.website) for c in companies] == [("Acme", "acme.test")]


class TestImportCompanies:

    def test_imports_rows_and_blank_optionals(self, db, write_csv):
        path = write_csv("companies.csv", HEADER + (
            "Acme,acme.test,hello@acme.test,Software\n"
            "Globex,globex.test,,\n"
        ))

        summary = import_companies_from_csv(db, path)

        assert summary["inserted"] == 2
        assert summary["skipped"] == 0
        globex = db.scalars(select(Company).where(Company.name == "Globex")).one()
        assert globex.email is None
        assert globex.industry is None

    def test_duplicate_names_are_skipped(self, db, write_csv):
        create_company(db, CompanyCreate(name="Acme", website="acme.test"))
        path = write_csv("companies.csv", HEADER + (
            "Acme,other.test,,\n"
            "Initech,initech.test,,\n"
            "Initech,initech.example,,\n"
        ))

        summary = import_companies_from_csv(db, path)

        assert summary["total_rows"] == 3
        assert summary["inserted"] == 1
        assert summary["skipped"] == 2
        assert summary["errors"] == [
            "Row 2: Skipped duplicate company 'Acme'",
            "Row 4: Skipped duplicate company 'Initech'",
        ]
        acme = db.scalars(select(Company).where(Company.name == "Acme")).one()
        assert acme.website == "acme.test"

    def test_row_without_website_is_skipped(self, db, write_csv):
        path = write_csv("companies.csv", HEADER + "Acme\n")

        summary = import_companies_from_csv(db, path)

        assert summary["inserted"] == 0
        assert summary["errors"][0].startswith("Row 2:")

    def test_data_error_skips_row_and_continues(self, db, write_csv, monkeypatch):
        real_create = companies.service.create_company

        def create(session, record):
            if record.name == "Bad":
                raise DataError("INSERT INTO companies", {}, Exception("invalid byte sequence"))
            return real_create(session, record)

        monkeypatch.setattr(companies.service, "create_company", create)
        path = write_csv("companies.csv", HEADER + (
            "Bad,bad.test,,\n"
            "\n"
            "Acme,acme.test,,\n"
        ))

        summary = import_companies_from_csv(db, path)

        assert summary["inserted"] == 1
        assert summary["skipped"] == 1
        assert summary["errors"][0].startswith("Row 2:")
        assert "invalid byte sequence" in summary["errors"][0]
        assert db.scalars(select(Company.name)).one() == "Acme"

    def test_missing_required_column(self, db, write_csv):
        path = write_csv("companies.csv", "Name,Email\nAcme,hello@acme.test\n")

        with pytest.raises(CsvImportError, match="Website"):
            import_companies_from_csv(db, path)


class TestSyncCompanies:

    def test_inserts_placeholder_for_missing_names(self, db):
        create_company(db, CompanyCreate(name="Acme", website="acme.test"))
        _add_contact(db, "Acme", "Jane")
        _add_contact(db, "Globex", "John")
        _add_contact(db, "Globex", "Jim")

        result = sync_companies_from_contacts(db)

        assert result == {
            "contacts_scanned": 3,
            "companies_inserted": 1,
            "companies_existing": 1,
        }
        companies = {c.name: c.website for c in db.scalars(select(Company)).all()}
        assert companies == {"Acme": "acme.test", "Globex": PLACEHOLDER_WEBSITE}

    def test_blank_company_is_ignored(self, db):
        _add_contact(db, "   ")

        result = sync_companies_from_contacts(db)

        assert result["companies_inserted"] == 0
        assert db.scalars(select(Company)).all() == []

    def test_running_twice_inserts_nothing_new(self, db):
        _add_contact(db, "Globex")

        sync_companies_from_contacts(db)
        result = sync_companies_from_contacts(db)

        assert result["companies_inserted"] == 0
        assert result["companies_existing"] == 1

    def test_contacts_stay_unlinked(self, db):
        _add_contact(db, "Globex")

        sync_companies_from_contacts(db)

        contact = db.scalars(select(Contact)).one()
        assert contact.company == "Globex"
        assert not hasattr(contact, "company_id")

    def test_failure_rolls_back_everything(self, db, monkeypatch):
        _add_contact(db, "Globex", "John")
        _add_contact(db, "Initech", "Jim")

        calls = []

        def failing_exists(session, name):
            calls.append(name)
            if name == "Initech":
                raise RuntimeError("connection lost")
            return False

        monkeypatch.setattr("companies.service.company_exists", failing_exists)

        with pytest.raises(RuntimeError, match="connection lost"):
            sync_companies_from_contacts(db)

        assert calls == ["Globex", "Initech"]
        assert db.scalars(select(Company)).all() == []
