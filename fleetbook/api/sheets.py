"""
Spreadsheet sync API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from fleetbook.db.database import get_db
from fleetbook.schemas.shipment import ShipmentCreate
from fleetbook.services.sheet_sync import SheetSyncNotConfigured, WorkbookSheetSync, get_sheet_sync, require_sheet_sync
from fleetbook.services.shipment_store import create_shipment, list_shipments

logger = logging.getLogger(__name__)
router = APIRouter()


def _sync_or_400() -> WorkbookSheetSync:
    try:
        return require_sheet_sync()
    except SheetSyncNotConfigured as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@router.get("/status")
async def sheet_status():
    """Whether sync is configured and how many rows the sheet holds."""
    sync = get_sheet_sync()
    if sync is None:
        return {"configured": False}
    return sync.status()


@router.post("/sync-all")
async def sync_all_to_sheet(
    db: Session = Depends(get_db)
):
    """Rewrite the sheet with every stored shipment."""
    sync = _sync_or_400()
    try:
        synced = sync.sync_all(list_shipments(db))
    except Exception as e:
        logger.error(f"Error syncing all shipments to sheet: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to sync to sheet: {str(e)}"
        )
    return {"message": "All shipments have been synced", "synced": synced}


@router.post("/import")
async def import_from_sheet(
    db: Session = Depends(get_db)
):
    """Create shipments for sheet rows whose id is not already stored.

    Imported rows are rewritten with the id the new shipment got, so a
    second import skips them.
    """
    sync = _sync_or_400()
    try:
        rows = sync.read_shipments()
    except Exception as e:
        logger.error(f"Error reading shipments from sheet: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read sheet: {str(e)}"
        )

    stored_ids = {shipment.id for shipment in list_shipments(db)}
    created, skipped, invalid = 0, 0, 0
    for row in rows:
        row_id = _as_int(row.pop("id", None))
        row_number = row.pop("row_number")
        if row_id in stored_ids:
            skipped += 1
            continue
        try:
            payload = ShipmentCreate(**row)
        except ValidationError as e:
            logger.warning(f"Skipping invalid sheet row {row_id}: {e.error_count()} errors")
            invalid += 1
            continue
        try:
            shipment = create_shipment(db, payload)
        except Exception as e:
            db.rollback()
            logger.error(f"Error importing sheet row {row_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to import sheet row {row_id}: {str(e)}"
            )
        created += 1
        try:
            sync.stamp_row(row_number, shipment)
        except Exception as e:
            logger.error(f"Error writing id {shipment.id} back to sheet row {row_number}: {str(e)}")

    logger.info(f"Sheet import finished created={created} skipped={skipped} invalid={invalid}")
    return {"created": created, "skipped": skipped, "invalid": invalid}
