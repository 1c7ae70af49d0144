from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from utils.text import blank_to_none


class CompanyBase(BaseModel):
    name: str
    website: str
    email: Optional[str] = None
    industry: Optional[str] = None


class CompanyCreate(CompanyBase):
    pass


class CompanyRead(CompanyBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CompanyCsvRow(CompanyBase):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="Name")
    website: str = Field(alias="Website")
    email: Optional[str] = Field(default=None, alias="Email")
    industry: Optional[str] = Field(default=None, alias="Industry")

    @field_validator("email", "industry", mode="before")
    @classmethod
    def empty_cell_is_absent(cls, value):
        return blank_to_none(value)


REQUIRED_CSV_COLUMNS = ["Name", "Website"]
