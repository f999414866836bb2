"""
Shipment model - one consignment carried by a truck.
"""
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, Enum as SQLEnum
from datetime import datetime
import enum
from fleetbook.db.database import Base


class RateMode(str, enum.Enum):
    CALCULATED = "calculated"
    FIXED = "fixed"


class Shipment(Base):
    __tablename__ = "shipments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(DateTime, nullable=False, index=True)
    consignment_number = Column(String, nullable=False, default="")
    truck_number = Column(String, nullable=False, default="", index=True)
    consignor = Column(String, nullable=False, default="")
    consignor_location = Column(String, nullable=False, default="")
    consignee = Column(String, nullable=False, default="")
    consignee_location = Column(String, nullable=False, default="")

    weight = Column(Numeric(10, 2), nullable=False, default=0)  # kg
    rate = Column(Numeric(10, 2), nullable=True)  # per 1000 kg, NULL in fixed mode
    rate_mode = Column(
        SQLEnum(
            RateMode,
            native_enum=False,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=RateMode.CALCULATED.value,
    )
    delivery_charge = Column(Numeric(10, 2), nullable=False, default=0)
    freight = Column(Numeric(10, 2), nullable=False, default=0)

    number_of_articles = Column(String, nullable=False, default="")  # e.g. "12" or "Loose"
    nature_of_goods = Column(String, nullable=False, default="")
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
