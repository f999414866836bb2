"""
Utilities for loading export/sync column configuration.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_PATH = Path(__file__).resolve().parent / "columns.yaml"

DEFAULT_EXPORT_COLUMNS: Dict[str, str] = {
    "date": "Date",
    "consignment_number": "Consignment Number",
    "truck_number": "Truck Number",
    "consignee": "Consignee",
    "consignee_location": "Consignee Location",
    "weight": "Weight (kg)",
    "rate": "Rate",
    "delivery_charge": "Delivery Charge",
    "freight": "Freight",
    "consignor_location": "Consignor Location",
    "number_of_articles": "No. of Articles",
    "nature_of_goods": "Nature of Goods",
    "consignor": "Consignor",
    "notes": "Notes",
}

DEFAULT_SHEET_COLUMNS: Dict[str, str] = {
    "id": "ID",
    **DEFAULT_EXPORT_COLUMNS,
    "weight": "Weight",
    "number_of_articles": "Number of Articles",
    "last_updated": "Last Updated",
}


@lru_cache()
def load_column_config(path: Optional[str] = None) -> Dict[str, Any]:
    config_path = Path(path) if path else CONFIG_PATH
    if not config_path.exists():
        return {}
    with open(config_path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _section(name: str) -> Dict[str, Any]:
    return load_column_config().get(name) or {}


def get_export_columns() -> Dict[str, str]:
    return dict(_section("export").get("columns") or DEFAULT_EXPORT_COLUMNS)


def get_export_sheet_name() -> str:
    return _section("export").get("sheet_name") or "Shipments"


def get_sheet_columns() -> Dict[str, str]:
    columns = dict(_section("sheet_sync").get("columns") or DEFAULT_SHEET_COLUMNS)
    # Rows are keyed by id, so it always leads
    if "id" not in columns:
        columns = {"id": "ID", **columns}
    return columns


def get_sheet_name() -> str:
    return _section("sheet_sync").get("sheet_name") or "Sheet1"


def get_sheet_defaults() -> Dict[str, Any]:
    return dict(_section("sheet_sync").get("defaults") or {})


def get_resource_labels() -> Dict[str, str]:
    return dict(load_column_config().get("resource_labels") or {})
