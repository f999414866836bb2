"""
Script to seed sample shipments and dropdown resources for a demo.
"""
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List

from fleetbook.db.database import Base, SessionLocal, engine
from fleetbook.models import Shipment
from fleetbook.schemas.shipment import ShipmentCreate
from fleetbook.services.resource_store import DatabaseResourceStore
from fleetbook.services.shipment_store import create_shipment

TRUCKS = ["MH12AB1234", "MH14CD5678", "GJ01EF9012"]
CONSIGNORS = [("Shree Textiles", "Surat"), ("Apex Steel", "Pune"), ("Green Agro", "Nashik")]
CONSIGNEES = [("Metro Retail", "Mumbai"), ("City Hardware", "Nagpur")]
GOODS = ["Textiles", "Steel Coils", "Onions"]


def samples_already_loaded(db) -> bool:
    return db.query(Shipment).filter(Shipment.consignment_number == "CN-1000").first() is not None


def build_sample_shipments(today: datetime, count: int = 12) -> List[ShipmentCreate]:
    samples = []
    for i in range(count):
        consignor, consignor_location = CONSIGNORS[i % len(CONSIGNORS)]
        consignee, consignee_location = CONSIGNEES[i % len(CONSIGNEES)]
        fixed = i % 5 == 4
        samples.append(ShipmentCreate(
            date=today - timedelta(days=i * 2),
            consignment_number=f"CN-{1000 + i}",
            truck_number=TRUCKS[i % len(TRUCKS)],
            consignor=consignor,
            consignor_location=consignor_location,
            consignee=consignee,
            consignee_location=consignee_location,
            weight=Decimal(1500 + 250 * i),
            rate="Fix" if fixed else Decimal(40 + i),
            delivery_charge=Decimal(100 if i % 2 else 0),
            freight=Decimal(2500) if fixed else None,
            number_of_articles=str(10 + i) if i % 3 else "Loose",
            nature_of_goods=GOODS[i % len(GOODS)],
        ))
    return samples


def create_sample_shipments():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        # Check if the sample set was already loaded
        if samples_already_loaded(db):
            print("Sample shipments already exist (CN-1000 found), nothing to do")
            return

        resources = DatabaseResourceStore(db)
        for truck in TRUCKS:
            resources.add("truck_numbers", truck)
        for consignor, location in CONSIGNORS:
            resources.add("consignors", consignor)
            resources.add("consignor_locations", location)
        for consignee, location in CONSIGNEES:
            resources.add("consignees", consignee)
            resources.add("consignee_locations", location)
        for goods in GOODS:
            resources.add("nature_of_goods", goods)

        for payload in build_sample_shipments(datetime.now()):
            shipment = create_shipment(db, payload)
            print(f"Created shipment {shipment.consignment_number} (ID: {shipment.id}) freight={shipment.freight}")
    except Exception as e:
        print(f"Error: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    create_sample_shipments()
