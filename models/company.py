from sqlalchemy import Column, Integer, Text, DateTime, func
from database import Base


class Company(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    website = Column(Text, nullable=False)
    email = Column(Text, nullable=True)
    industry = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Company {self.name} {self.website}>"
