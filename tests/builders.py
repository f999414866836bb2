"""
Builders for shipment payloads and records used across tests.
"""

from datetime import datetime
from decimal import Decimal

from fleetbook.services.records import ShipmentRecord


def shipment_payload(**overrides):
    """JSON body for POST /api/shipments/."""
    payload = {
        "date": "2024-02-10T09:30:00",
        "consignment_number": "CN-001",
        "truck_number": "TRK1",
        "consignor": "Acme Mills",
        "consignor_location": "Surat",
        "consignee": "Metro Retail",
        "consignee_location": "Mumbai",
        "weight": 1000,
        "rate": 50,
        "delivery_charge": 20,
        "number_of_articles": "12",
        "nature_of_goods": "Textiles",
    }
    payload.update(overrides)
    return payload


def make_record(**overrides) -> ShipmentRecord:
    """Shipment record with sensible defaults for engine tests."""
    values = {
        "id": 1,
        "date": datetime(2024, 2, 10, 9, 30),
        "consignment_number": "CN-001",
        "truck_number": "TRK1",
        "consignor": "Acme Mills",
        "consignor_location": "Surat",
        "consignee": "Metro Retail",
        "consignee_location": "Mumbai",
        "weight": Decimal("1000"),
        "rate": Decimal("50"),
        "delivery_charge": Decimal("0"),
        "freight": Decimal("100"),
        "number_of_articles": "12",
        "nature_of_goods": "Textiles",
    }
    values.update(overrides)
    return ShipmentRecord.from_source(values)
