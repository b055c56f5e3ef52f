from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.door_activity import DoorActivityCreate, DoorActivityResponse, DoorActivityListResponse
from app.services.door_activity_service import DoorActivityService

router = APIRouter(prefix="/door-activity", tags=["Door Activity"])


@router.post("", response_model=DoorActivityResponse, status_code=201)
def record_door_activity(
    payload: DoorActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return DoorActivityService(db, current_user).record(payload)


@router.get("", response_model=DoorActivityListResponse)
def list_door_activities(
    day: Optional[date] = Query(None, alias="date"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return DoorActivityService(db, current_user).list_activities(page=page, limit=limit, day=day)


@router.get("/{activity_id}", response_model=DoorActivityResponse)
def get_door_activity(
    activity_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return DoorActivityService(db, current_user).get_activity(activity_id)
