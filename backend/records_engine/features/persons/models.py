"""
Person model.
"""

from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, DateTime

from records_engine.models.base import Base


class Person(Base):
    """Competitor. The region determines which national record a result can hold."""

    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    localized_name = Column(String(255), nullable=True)
    region_code = Column(String(2), nullable=False)
    wca_id = Column(String(10), nullable=True, unique=True)
    approved = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Person {self.id} {self.name} ({self.region_code})>"
