"""
Record configuration model.

Each record category has one config per record type, holding the label
shown for records of that type (e.g. "XWR" for competition world records).
"""

from sqlalchemy import Column, String, Integer, Boolean

from records_engine.models.base import Base


class RecordConfig(Base):
    """Label and display settings of one record type in one category."""

    __tablename__ = "record_configs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    record_type_id = Column(String(3), nullable=False)
    category = Column(String(30), nullable=False)
    label = Column(String(10), nullable=False, unique=True)
    active = Column(Boolean, nullable=False, default=True)
    rank = Column(Integer, nullable=False)
    color = Column(String(7), nullable=False)

    def __repr__(self):
        return f"<RecordConfig {self.category} {self.record_type_id} ({self.label})>"
