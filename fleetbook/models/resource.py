"""
Resource entry model - values offered in the form dropdowns.
"""
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from datetime import datetime
from fleetbook.db.database import Base


class ResourceEntry(Base):
    __tablename__ = "resource_entries"
    __table_args__ = (
        UniqueConstraint("resource_type", "value", name="uq_resource_type_value"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    resource_type = Column(String, nullable=False, index=True)  # e.g. "truck_numbers"
    value = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
