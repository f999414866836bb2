"""
Export services for Excel and PDF reports.
"""
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import pandas as pd
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
import time
import logging
from fleetbook.config.column_loader import get_export_columns, get_export_sheet_name
from fleetbook.db.database import settings
from fleetbook.services.aggregation import DashboardResult
from fleetbook.services.freight import display_rate
from fleetbook.services.records import ShipmentRecord, to_records

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")


def _export_dir(export_dir: Optional[str] = None) -> Path:
    path = Path(export_dir or settings.export_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _cell_value(record: ShipmentRecord, field_name: str) -> Any:
    if field_name == "date":
        return record.day_key
    if field_name == "rate":
        rate = display_rate(record.rate, record.rate_mode)
        return rate if isinstance(rate, str) else float(rate)
    value = getattr(record, field_name, "")
    if hasattr(value, "quantize"):
        return float(value)
    return value


def shipment_rows(shipments: Iterable[Any], columns: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
    """Map shipments to export rows keyed by the configured headers."""
    columns = columns or get_export_columns()
    return [
        {header: _cell_value(record, field_name) for field_name, header in columns.items()}
        for record in to_records(shipments)
    ]


def generate_excel_export(shipments: Iterable[Any], export_dir: Optional[str] = None) -> str:
    """
    Write the given (already filtered) shipments to a new workbook and
    return its path.
    """
    start_time = time.perf_counter()
    columns = get_export_columns()
    rows = shipment_rows(shipments, columns)
    if not rows:
        raise ValueError("No data to export")

    sheet_name = get_export_sheet_name()
    file_path = _export_dir(export_dir) / f"shipments_{datetime.now():%Y-%m-%d_%H-%M-%S}.xlsx"

    with pd.ExcelWriter(file_path, engine="openpyxl") as writer:
        df = pd.DataFrame(rows, columns=list(columns.values()))
        df.to_excel(writer, sheet_name=sheet_name, index=False)

        ws = writer.sheets[sheet_name]
        for idx, header in enumerate(df.columns, start=1):
            cell = ws.cell(row=1, column=idx)
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL
            ws.column_dimensions[get_column_letter(idx)].width = max(12, len(str(header)) + 2)
        ws.freeze_panes = "A2"

    duration = round(time.perf_counter() - start_time, 3)
    logger.info("Excel export generated rows=%d in %.2fs -> %s", len(rows), duration, file_path)
    return str(file_path)


def _table(data: List[List[Any]]) -> Table:
    table = Table(data, hAlign="LEFT")
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#DDEBF7")),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
    ]))
    return table


def generate_pdf_summary(result: DashboardResult, export_dir: Optional[str] = None) -> str:
    """
    Generate a PDF dashboard summary: KPIs plus truck, consignor and daily
    breakdown tables for the resolved period.
    """
    start_time = time.perf_counter()
    payload = result.to_dict()
    summary = payload["summary"]

    file_path = _export_dir(export_dir) / f"dashboard_{datetime.now():%Y-%m-%d_%H-%M-%S}.pdf"
    doc = SimpleDocTemplate(str(file_path), pagesize=A4)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "DashboardTitle",
        parent=styles["Heading1"],
        fontSize=18,
        textColor=colors.HexColor("#1a1a1a"),
        spaceAfter=12,
    )

    story = [
        Paragraph("Shipment Dashboard", title_style),
        Paragraph(payload["date_range"]["label"], styles["Normal"]),
        Spacer(1, 0.2 * inch),
        _table([
            ["Metric", "Value"],
            ["Total Trips", summary["total_trips"]],
            ["Total Revenue", f"{summary['total_revenue']:,.2f}"],
            ["Total Weight (kg)", f"{summary['total_weight']:,.1f}"],
            ["Avg Weight (kg)", f"{summary['average_weight']:,.1f}"],
            ["Active Trucks", summary["unique_trucks"]],
            ["Consignors", summary["unique_consignors"]],
        ]),
    ]

    sections = [
        ("Trips per Truck", ["Truck", "Trips", "Revenue"], "per_truck", ("truck", "trips", "revenue")),
        ("Revenue per Consignor", ["Consignor", "Revenue", "Trips"], "per_consignor", ("consignor", "revenue", "trips")),
        ("Revenue per Day", ["Date", "Revenue", "Trips"], "per_day", ("date", "revenue", "trips")),
    ]
    for heading, headers, key, fields in sections:
        rows = payload[key]
        if not rows:
            continue
        story.append(Spacer(1, 0.25 * inch))
        story.append(Paragraph(heading, styles["Heading2"]))
        data = [headers]
        for row in rows:
            data.append([f"{row[f]:,.2f}" if f == "revenue" else row[f] for f in fields])
        story.append(_table(data))

    doc.build(story)
    duration = round(time.perf_counter() - start_time, 3)
    logger.info("PDF dashboard summary generated for %s in %.2fs", payload["date_range"]["label"], duration)
    return str(file_path)
