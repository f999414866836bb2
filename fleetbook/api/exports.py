"""
Export API endpoints (Excel, PDF).
"""
import logging
import os
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session
from typing import Optional
from fleetbook.api.shipments import optional_date_range, shipment_filters
from fleetbook.db.database import get_db
from fleetbook.services.aggregation import build_dashboard
from fleetbook.services.date_range import DateRange
from fleetbook.services.export import generate_excel_export, generate_pdf_summary
from fleetbook.services.filtering import ShipmentFilters
from fleetbook.services.shipment_store import list_shipments, search_shipments

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/shipments.xlsx")
async def download_shipments_excel(
    filters: ShipmentFilters = Depends(shipment_filters),
    date_range: Optional[DateRange] = Depends(optional_date_range),
    db: Session = Depends(get_db)
):
    """Download the filtered shipment list as an Excel workbook."""
    shipments = search_shipments(db, filters, date_range)
    if not shipments:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No data to export"
        )

    try:
        file_path = generate_excel_export(shipments)
    except Exception as e:
        logger.error(f"Error generating Excel export: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generating Excel export: {str(e)}"
        )
    return FileResponse(
        file_path,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        filename=os.path.basename(file_path)
    )


@router.get("/dashboard.pdf")
async def download_dashboard_pdf(
    period: str = Query(default="current_month"),
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    db: Session = Depends(get_db)
):
    """Download the dashboard summary for a period as PDF."""
    try:
        result = build_dashboard(list_shipments(db), period=period, start=start, end=end)
        file_path = generate_pdf_summary(result)
    except Exception as e:
        logger.error(f"Error generating PDF summary: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generating PDF summary: {str(e)}"
        )
    return FileResponse(
        file_path,
        media_type="application/pdf",
        filename=os.path.basename(file_path)
    )
