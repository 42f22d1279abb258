from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional
from datetime import datetime
from ..database import get_db
from ..services.event_service import EventService
from ..schemas.event import EventFilterParams
from ..utils.router_helpers import handle_service_errors, RouterResponse

router = APIRouter(tags=["events"])


@router.get("", response_model=Dict[str, Any])
@handle_service_errors
async def get_events(db: Session = Depends(get_db)):
    """Approved, active events open to the public"""
    events = EventService(db).get_public_events()
    return RouterResponse.success(data=events)


@router.get("/filter", response_model=Dict[str, Any])
@handle_service_errors
async def filter_events(
    type: Optional[str] = Query(None, description="Event category"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    search: Optional[str] = Query(None, description="Matches name or description"),
    db: Session = Depends(get_db),
):
    filters = EventFilterParams(
        type=type,
        min_price=min_price,
        max_price=max_price,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    events = EventService(db).get_public_events(filters)
    return RouterResponse.success(data=events)


@router.get("/{event_id}", response_model=Dict[str, Any])
@handle_service_errors
async def get_event(event_id: int, db: Session = Depends(get_db)):
    event = EventService(db).get_event_details(event_id)
    return RouterResponse.success(data=event)
