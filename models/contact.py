from sqlalchemy import Column, Integer, Text, DateTime, func
from database import Base


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    url = Column(Text, nullable=False)
    email_address = Column(Text, nullable=True)
    # Free text, not a foreign key to companies.name
    company = Column(Text, nullable=False)
    position = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Contact {self.first_name} {self.last_name} ({self.company})>"
