from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from utils.text import blank_to_none


class ContactBase(BaseModel):
    first_name: str
    last_name: str
    url: str
    email_address: Optional[str] = None
    company: str
    position: str


class ContactCreate(ContactBase):
    pass


class ContactRead(ContactBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContactCsvRow(ContactBase):
    """One row of a LinkedIn connections export."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(alias="First Name")
    last_name: str = Field(alias="Last Name")
    url: str = Field(alias="URL")
    email_address: Optional[str] = Field(default=None, alias="Email Address")
    company: str = Field(alias="Company")
    position: str = Field(alias="Position")

    @field_validator("email_address", mode="before")
    @classmethod
    def empty_email_is_absent(cls, value):
        return blank_to_none(value)


REQUIRED_CSV_COLUMNS = ["First Name", "Last Name", "URL", "Company", "Position"]
