"""
Search and facet filtering over shipment records.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fleetbook.services.date_range import DateRange
from fleetbook.services.freight import display_rate
from fleetbook.services.records import ShipmentRecord

FACET_FIELDS = (
    "consignor",
    "consignee",
    "consignor_location",
    "consignee_location",
    "truck_number",
    "nature_of_goods",
)

# Fields searched by the shipment list view
SEARCH_FIELDS = (
    "consignment_number",
    "truck_number",
    "consignee",
    "consignor",
)

# Fields searched by the full data table view
ALL_SEARCH_FIELDS = SEARCH_FIELDS + (
    "consignee_location",
    "consignor_location",
    "nature_of_goods",
    "number_of_articles",
    "notes",
)


@dataclass(frozen=True)
class ShipmentFilters:
    search: str = ""
    consignor: str = ""
    consignee: str = ""
    consignor_location: str = ""
    consignee_location: str = ""
    truck_number: str = ""
    nature_of_goods: str = ""
    search_all_fields: bool = False

    @classmethod
    def from_raw(cls, raw: Optional[Dict[str, Any]]) -> "ShipmentFilters":
        raw = raw or {}
        values: Dict[str, Any] = {}
        for f in fields(cls):
            value = raw.get(f.name)
            if f.name == "search_all_fields":
                values[f.name] = bool(value)
            else:
                values[f.name] = "" if value is None else str(value)
        values["search"] = values["search"].strip()
        return cls(**values)

    def active_facets(self) -> Dict[str, str]:
        return {name: getattr(self, name) for name in FACET_FIELDS if getattr(self, name)}

    @property
    def is_empty(self) -> bool:
        return not self.search and not self.active_facets()


def _searchable_values(record: ShipmentRecord, all_fields: bool) -> List[str]:
    if not all_fields:
        return [getattr(record, name) for name in SEARCH_FIELDS]
    values = [getattr(record, name) for name in ALL_SEARCH_FIELDS]
    values.extend([
        record.day_key,
        str(record.weight),
        str(display_rate(record.rate, record.rate_mode)),
        str(record.delivery_charge),
        str(record.freight),
    ])
    if record.id is not None:
        values.append(str(record.id))
    return values


def matches_search(record: ShipmentRecord, term: str, all_fields: bool = False) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in value.lower() for value in _searchable_values(record, all_fields))


def matches_facets(record: ShipmentRecord, facets: Dict[str, str]) -> bool:
    return all(getattr(record, name) == value for name, value in facets.items())


def filter_shipments(
    shipments: Sequence[ShipmentRecord],
    filters: Optional[ShipmentFilters] = None,
) -> List[ShipmentRecord]:
    """Return shipments matching the search term and every set facet.

    Input order is preserved. With no search term and no facets the input
    comes back unchanged.
    """
    filters = filters or ShipmentFilters()
    if filters.is_empty:
        return list(shipments)

    facets = filters.active_facets()
    return [
        record
        for record in shipments
        if matches_search(record, filters.search, filters.search_all_fields)
        and matches_facets(record, facets)
    ]


def filter_by_date_range(shipments: Iterable[ShipmentRecord], date_range: DateRange) -> List[ShipmentRecord]:
    """Keep shipments dated within the range, inclusive at both ends."""
    return [record for record in shipments if date_range.contains(record.date)]


def facet_options(shipments: Iterable[ShipmentRecord]) -> Dict[str, List[str]]:
    """Distinct non-empty values per facet, for the filter dropdowns."""
    seen: Dict[str, set] = {name: set() for name in FACET_FIELDS}
    for record in shipments:
        for name in FACET_FIELDS:
            value = getattr(record, name)
            if value:
                seen[name].add(value)
    return {name: sorted(values) for name, values in seen.items()}
