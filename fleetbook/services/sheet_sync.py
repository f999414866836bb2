"""
Workbook sync - mirrors stored shipments into a spreadsheet keyed by id.

Row 1 holds the headers from the column config, column A holds the
shipment id. Single shipments are upserted or removed as they change and
the whole sheet can be rewritten or read back for import.
"""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.worksheet.worksheet import Worksheet

from fleetbook.config.column_loader import get_sheet_columns, get_sheet_defaults, get_sheet_name
from fleetbook.db.database import settings
from fleetbook.services.freight import display_rate, to_decimal
from fleetbook.services.records import ShipmentRecord, to_naive_datetime

logger = logging.getLogger(__name__)

_SYNC_LOCK = Lock()


class SheetSyncNotConfigured(RuntimeError):
    pass


def _sheet_value(record: ShipmentRecord, field_name: str, synced_at: str) -> Any:
    if field_name == "last_updated":
        return synced_at
    if field_name == "date":
        return record.day_key
    if field_name == "rate":
        rate = display_rate(record.rate, record.rate_mode)
        return rate if isinstance(rate, str) else float(rate)
    value = getattr(record, field_name, "")
    if hasattr(value, "quantize"):
        return float(value)
    return value


class WorkbookSheetSync:
    def __init__(self, path: str, sheet_name: Optional[str] = None, columns: Optional[Dict[str, str]] = None):
        self.path = Path(path)
        self.sheet_name = sheet_name or get_sheet_name()
        self.columns = columns or get_sheet_columns()
        self.fields = list(self.columns.keys())

    def _open(self):
        if self.path.exists():
            wb = load_workbook(self.path)
        else:
            wb = Workbook()
            wb.active.title = self.sheet_name
        ws = wb[self.sheet_name] if self.sheet_name in wb.sheetnames else wb.create_sheet(self.sheet_name)
        self._ensure_headers(ws)
        return wb, ws

    def _save(self, wb) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(self.path)

    def _ensure_headers(self, ws: Worksheet) -> None:
        if ws.cell(row=1, column=1).value:
            return
        for idx, header in enumerate(self.columns.values(), start=1):
            cell = ws.cell(row=1, column=idx, value=header)
            cell.font = Font(bold=True)
        logger.info("Sheet headers created in %s", self.path)

    def _row_values(self, shipment: Any) -> List[Any]:
        record = ShipmentRecord.from_source(shipment)
        synced_at = datetime.utcnow().isoformat()
        return [_sheet_value(record, name, synced_at) for name in self.fields]

    @staticmethod
    def _find_row(ws: Worksheet, shipment_id: Any) -> int:
        target = str(shipment_id)
        for row_idx in range(2, ws.max_row + 1):
            value = ws.cell(row=row_idx, column=1).value
            if value is not None and str(value) == target:
                return row_idx
        return -1

    @staticmethod
    def _write_row(ws: Worksheet, row_idx: int, values: List[Any]) -> None:
        for col_idx, value in enumerate(values, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    def sync_shipment(self, shipment: Any) -> None:
        values = self._row_values(shipment)
        with _SYNC_LOCK:
            wb, ws = self._open()
            row_idx = self._find_row(ws, values[0])
            if row_idx < 0:
                row_idx = ws.max_row + 1
            self._write_row(ws, row_idx, values)
            self._save(wb)

    def stamp_row(self, row_number: int, shipment: Any) -> None:
        """Overwrite a sheet row in place, e.g. with the id a shipment got on import."""
        values = self._row_values(shipment)
        with _SYNC_LOCK:
            wb, ws = self._open()
            self._write_row(ws, row_number, values)
            self._save(wb)

    def delete_shipment(self, shipment_id: Any) -> bool:
        with _SYNC_LOCK:
            wb, ws = self._open()
            row_idx = self._find_row(ws, shipment_id)
            if row_idx < 0:
                return False
            ws.delete_rows(row_idx)
            self._save(wb)
        return True

    def sync_all(self, shipments: Iterable[Any]) -> int:
        rows = [self._row_values(shipment) for shipment in shipments]
        with _SYNC_LOCK:
            wb, ws = self._open()
            if ws.max_row > 1:
                ws.delete_rows(2, ws.max_row - 1)
            for row_idx, values in enumerate(rows, start=2):
                self._write_row(ws, row_idx, values)
            self._save(wb)
        logger.info("Synced %d shipments to %s", len(rows), self.path)
        return len(rows)

    def read_shipments(self) -> List[Dict[str, Any]]:
        """Rows as shipment payloads, with blanks filled the way the sheet import expects."""
        if not self.path.exists():
            return []
        defaults = get_sheet_defaults()
        with _SYNC_LOCK:
            wb, ws = self._open()
            raw_rows = list(ws.iter_rows(min_row=2, values_only=True))

        rows: List[Dict[str, Any]] = []
        for row_number, raw in enumerate(raw_rows, start=2):
            if not raw or all(value in (None, "") for value in raw):
                continue
            cells = dict(zip(self.fields, raw))
            row = {
                "id": cells.get("id"),
                "row_number": row_number,
                "date": to_naive_datetime(cells.get("date")) or datetime.now(),
                "weight": to_decimal(cells.get("weight")),
                "rate": cells.get("rate") if cells.get("rate") not in (None, "") else "0",
                "delivery_charge": to_decimal(cells.get("delivery_charge")),
                "freight": to_decimal(cells.get("freight")),
                "notes": cells.get("notes") or "",
            }
            for name in (
                "consignment_number", "truck_number", "consignee", "consignee_location",
                "consignor_location", "number_of_articles", "nature_of_goods", "consignor",
            ):
                value = cells.get(name)
                if value in (None, ""):
                    value = defaults.get(name, "")
                row[name] = str(value)
            rows.append(row)
        return rows

    def status(self) -> Dict[str, Any]:
        row_count = 0
        if self.path.exists():
            with _SYNC_LOCK:
                _, ws = self._open()
                row_count = max(ws.max_row - 1, 0)
        return {
            "configured": True,
            "path": str(self.path),
            "sheet_name": self.sheet_name,
            "exists": self.path.exists(),
            "row_count": row_count,
        }


def get_sheet_sync() -> Optional[WorkbookSheetSync]:
    if not settings.sheet_sync_path:
        return None
    return WorkbookSheetSync(settings.sheet_sync_path)


def require_sheet_sync() -> WorkbookSheetSync:
    sync = get_sheet_sync()
    if sync is None:
        raise SheetSyncNotConfigured("Sheet sync is not configured. Set SHEET_SYNC_PATH.")
    return sync
