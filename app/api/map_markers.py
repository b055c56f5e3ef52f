from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.map import MapResponse
from app.services.map_service import MapService, MarkerFilters

router = APIRouter(prefix="/map", tags=["Map"])


@router.get("/markers", response_model=MapResponse)
def get_markers(
    leads: bool = Query(True),
    contacts: bool = Query(True),
    accounts: bool = Query(True),
    activities: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    filters = MarkerFilters(leads=leads, contacts=contacts, accounts=accounts, activities=activities)
    return MapService(db, current_user).get_map(filters)
