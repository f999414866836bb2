"""
Shipment API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from fleetbook.db.database import get_db
from fleetbook.schemas.shipment import (
    ShipmentCreate,
    ShipmentUpdate,
    ShipmentResponse,
    FacetOptionsResponse,
)
from fleetbook.services.date_range import DateRange, resolve_date_range
from fleetbook.services.filtering import ShipmentFilters, facet_options
from fleetbook.services.records import to_records
from fleetbook.services.sheet_sync import get_sheet_sync
from fleetbook.services.shipment_store import (
    create_shipment,
    delete_shipment,
    get_shipment,
    list_shipments,
    search_shipments,
    update_shipment,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def shipment_filters(
    search: str = "",
    consignor: str = "",
    consignee: str = "",
    consignor_location: str = "",
    consignee_location: str = "",
    truck_number: str = "",
    nature_of_goods: str = "",
    search_all_fields: bool = False,
) -> ShipmentFilters:
    """Query-string dependency for the list/export filters."""
    return ShipmentFilters.from_raw({
        "search": search,
        "consignor": consignor,
        "consignee": consignee,
        "consignor_location": consignor_location,
        "consignee_location": consignee_location,
        "truck_number": truck_number,
        "nature_of_goods": nature_of_goods,
        "search_all_fields": search_all_fields,
    })


def optional_date_range(
    period: Optional[str] = Query(default=None),
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
) -> Optional[DateRange]:
    """Date narrowing is applied only when a period is given."""
    if not period:
        return None
    return resolve_date_range(period, start, end)


def _push_to_sheet(shipment) -> None:
    sync = get_sheet_sync()
    if sync is None:
        return
    try:
        sync.sync_shipment(shipment)
    except Exception as e:
        logger.error(f"Error syncing shipment {shipment.id} to sheet: {str(e)}")


def _remove_from_sheet(shipment_id: int) -> None:
    sync = get_sheet_sync()
    if sync is None:
        return
    try:
        sync.delete_shipment(shipment_id)
    except Exception as e:
        logger.error(f"Error deleting shipment {shipment_id} from sheet: {str(e)}")


@router.get("/", response_model=List[ShipmentResponse])
async def list_all_shipments(
    filters: ShipmentFilters = Depends(shipment_filters),
    date_range: Optional[DateRange] = Depends(optional_date_range),
    db: Session = Depends(get_db)
):
    """List shipments, optionally searched, faceted and narrowed to a period."""
    if filters.is_empty and date_range is None:
        return list_shipments(db)
    return search_shipments(db, filters, date_range)


@router.get("/facets", response_model=FacetOptionsResponse)
async def get_facet_options(
    db: Session = Depends(get_db)
):
    """Distinct values per filterable field, for the filter dropdowns."""
    return facet_options(to_records(list_shipments(db)))


@router.get("/{shipment_id}", response_model=ShipmentResponse)
async def get_one_shipment(
    shipment_id: int,
    db: Session = Depends(get_db)
):
    """Get a specific shipment."""
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} not found"
        )
    return shipment


@router.post("/", response_model=ShipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_new_shipment(
    shipment_data: ShipmentCreate,
    db: Session = Depends(get_db)
):
    """Create a new shipment. Freight is derived unless the rate is fixed."""
    try:
        shipment = create_shipment(db, shipment_data)
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating shipment: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create shipment: {str(e)}"
        )
    _push_to_sheet(shipment)
    return shipment


@router.put("/{shipment_id}", response_model=ShipmentResponse)
async def update_existing_shipment(
    shipment_id: int,
    shipment_data: ShipmentUpdate,
    db: Session = Depends(get_db)
):
    """Partially update a shipment."""
    try:
        shipment = update_shipment(db, shipment_id, shipment_data)
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating shipment {shipment_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update shipment: {str(e)}"
        )
    if not shipment:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} not found"
        )
    _push_to_sheet(shipment)
    return shipment


@router.delete("/{shipment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_existing_shipment(
    shipment_id: int,
    db: Session = Depends(get_db)
):
    """Delete a shipment. There is no undo."""
    try:
        deleted = delete_shipment(db, shipment_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error deleting shipment {shipment_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete shipment: {str(e)}"
        )
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shipment {shipment_id} not found"
        )
    _remove_from_sheet(shipment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
