from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..services.venue_service import VenueService
from ..schemas.venue import VenueResponse
from ..utils.router_helpers import handle_service_errors, RouterResponse

router = APIRouter(tags=["venues"])


@router.get("", response_model=Dict[str, Any])
@handle_service_errors
async def get_venues(db: Session = Depends(get_db)):
    """Venues currently available for booking"""
    venues = VenueService(db).get_available_venues()
    return RouterResponse.success(data=[VenueResponse.model_validate(v) for v in venues])
