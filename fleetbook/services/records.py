"""
Plain shipment records consumed by the filter and aggregation engines.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from fleetbook.models.shipment import RateMode
from fleetbook.services.freight import ZERO, parse_rate, to_decimal

TEXT_FIELDS = (
    "consignment_number",
    "truck_number",
    "consignor",
    "consignor_location",
    "consignee",
    "consignee_location",
    "number_of_articles",
    "nature_of_goods",
)


def _get(source: Any, name: str, default: Any = None) -> Any:
    if isinstance(source, Mapping):
        return source.get(name, default)
    return getattr(source, name, default)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def to_naive_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored or submitted date. Aware values are converted to naive UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass(frozen=True)
class ShipmentRecord:
    id: Any
    date: Optional[datetime]
    consignment_number: str = ""
    truck_number: str = ""
    consignor: str = ""
    consignor_location: str = ""
    consignee: str = ""
    consignee_location: str = ""
    weight: Decimal = ZERO
    rate: Optional[Decimal] = None
    rate_mode: RateMode = RateMode.CALCULATED
    delivery_charge: Decimal = ZERO
    freight: Decimal = ZERO
    number_of_articles: str = ""
    nature_of_goods: str = ""
    notes: str = ""

    @property
    def revenue(self) -> Decimal:
        return self.freight + self.delivery_charge

    @property
    def day_key(self) -> str:
        return self.date.strftime("%Y-%m-%d") if self.date else ""

    @classmethod
    def from_source(cls, source: Any) -> "ShipmentRecord":
        """Build a record from an ORM row, a pydantic model or a plain dict.

        Missing or malformed values never raise: numbers fall back to zero
        and text to an empty string.
        """
        if isinstance(source, cls):
            return source
        raw_mode = _get(source, "rate_mode")
        try:
            declared_mode = RateMode(raw_mode) if raw_mode else None
        except ValueError:
            declared_mode = None
        raw_rate = _get(source, "rate")
        rate_mode, rate = parse_rate(raw_rate, declared_mode)
        return cls(
            id=_get(source, "id"),
            date=to_naive_datetime(_get(source, "date")),
            weight=to_decimal(_get(source, "weight")),
            rate=None if raw_rate is None else rate,
            rate_mode=rate_mode,
            delivery_charge=to_decimal(_get(source, "delivery_charge")),
            freight=to_decimal(_get(source, "freight")),
            notes=_text(_get(source, "notes")),
            **{name: _text(_get(source, name)) for name in TEXT_FIELDS},
        )


def to_records(sources: Iterable[Any]) -> List[ShipmentRecord]:
    return [ShipmentRecord.from_source(source) for source in sources]
