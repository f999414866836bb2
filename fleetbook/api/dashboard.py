"""
Dashboard API endpoints.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from fleetbook.db.database import get_db
from fleetbook.schemas.dashboard import DashboardResponse
from fleetbook.services.aggregation import build_dashboard
from fleetbook.services.refresh_tracker import RefreshTicket, RefreshTracker, get_refresh_tracker
from fleetbook.services.shipment_store import list_shipments

logger = logging.getLogger(__name__)
router = APIRouter()


def _drop_superseded(tracker: RefreshTracker, ticket: RefreshTicket):
    tracker.finish(ticket)
    logger.info(
        f"Dropping superseded dashboard refresh for session {ticket.session}: "
        f"{ticket.params}, latest {tracker.latest_params(ticket.session)}"
    )
    raise HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="superseded"
    )


@router.get("/", response_model=DashboardResponse)
def get_dashboard(
    period: str = Query(default="current_month"),
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    session: Optional[str] = Query(default=None, description="Client session; older refreshes of the same session are dropped"),
    db: Session = Depends(get_db)
):
    """KPIs and chart series for the selected period."""
    tracker = get_refresh_tracker()
    ticket = tracker.begin(session, (period, start, end)) if session else None

    stale = False
    try:
        shipments = list_shipments(db)
        # Skip aggregation when a newer refresh already started
        stale = ticket is not None and not tracker.is_current(ticket)
        result = None if stale else build_dashboard(shipments, period=period, start=start, end=end)
    except Exception as e:
        if ticket:
            tracker.finish(ticket)
        logger.exception("dashboard failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error building dashboard: {str(e)}"
        )

    if ticket and (stale or not tracker.finish(ticket)):
        _drop_superseded(tracker, ticket)

    return {"period": period, **result.to_dict()}
