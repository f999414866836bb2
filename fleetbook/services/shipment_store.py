"""
Shipment persistence - create/read/update/delete over the shipments table.

Freight is kept consistent here: calculated-mode shipments get their freight
recomputed whenever weight, rate or delivery charge is written.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from fleetbook.models import Shipment, RateMode
from fleetbook.schemas.shipment import ShipmentCreate, ShipmentUpdate
from fleetbook.services.date_range import DateRange
from fleetbook.services.filtering import ShipmentFilters, filter_by_date_range, filter_shipments
from fleetbook.services.freight import calculate_freight, parse_rate, quantize_money, to_decimal
from fleetbook.services.records import to_records

logger = logging.getLogger(__name__)

FREIGHT_INPUTS = ("weight", "rate", "delivery_charge")
NULLABLE_FIELDS = {"notes"}


def list_shipments(db: Session) -> List[Shipment]:
    return db.query(Shipment).order_by(Shipment.date, Shipment.id).all()


def get_shipment(db: Session, shipment_id: int) -> Optional[Shipment]:
    return db.query(Shipment).filter(Shipment.id == shipment_id).first()


def create_shipment(db: Session, data: ShipmentCreate) -> Shipment:
    values = data.model_dump(exclude={"rate", "rate_mode", "freight"})
    rate_mode, rate = parse_rate(data.rate, data.rate_mode)
    freight = calculate_freight(
        data.weight,
        rate,
        data.delivery_charge,
        mode=rate_mode,
        fixed_freight=data.freight,
    )

    shipment = Shipment(
        **values,
        rate=rate,
        rate_mode=rate_mode.value,
        freight=freight,
    )
    db.add(shipment)
    db.commit()
    db.refresh(shipment)
    logger.info(
        "Created shipment id=%s consignment=%s truck=%s freight=%s",
        shipment.id,
        shipment.consignment_number,
        shipment.truck_number,
        freight,
    )
    return shipment


def _apply_rate(shipment: Shipment, changes: Dict[str, Any]) -> None:
    if "rate" not in changes and "rate_mode" not in changes:
        return
    current = shipment.rate if shipment.rate_mode == RateMode.CALCULATED.value else None
    rate_mode, rate = parse_rate(changes.get("rate", current), changes.get("rate_mode"))
    shipment.rate_mode = rate_mode.value
    shipment.rate = rate


def update_shipment(db: Session, shipment_id: int, data: ShipmentUpdate) -> Optional[Shipment]:
    """Apply a partial update. Returns None when the shipment does not exist."""
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        return None

    changes = data.model_dump(exclude_unset=True)
    _apply_rate(shipment, changes)
    for name, value in changes.items():
        if name in ("rate", "rate_mode", "freight"):
            continue
        if value is None and name not in NULLABLE_FIELDS:
            continue
        setattr(shipment, name, value)

    if shipment.rate_mode == RateMode.FIXED.value:
        if changes.get("freight") is not None:
            shipment.freight = quantize_money(to_decimal(changes["freight"]))
    elif any(name in changes for name in FREIGHT_INPUTS):
        shipment.freight = calculate_freight(shipment.weight, shipment.rate, shipment.delivery_charge)

    db.commit()
    db.refresh(shipment)
    logger.info("Updated shipment id=%s fields=%s", shipment.id, sorted(changes))
    return shipment


def delete_shipment(db: Session, shipment_id: int) -> bool:
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        return False
    db.delete(shipment)
    db.commit()
    logger.info("Deleted shipment id=%s", shipment_id)
    return True


def search_shipments(
    db: Session,
    filters: Optional[ShipmentFilters] = None,
    date_range: Optional[DateRange] = None,
) -> List[Shipment]:
    """Stored shipments narrowed by search/facets and an optional date range."""
    rows = list_shipments(db)
    records = to_records(rows)
    if date_range is not None:
        records = filter_by_date_range(records, date_range)
    kept_ids = {record.id for record in filter_shipments(records, filters)}
    return [row for row in rows if row.id in kept_ids]
