from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.core.errors import ValidationError
from app.models.user import User
from app.schemas.calendar import (
    CalendarEventCreate,
    CalendarEventResponse,
    CalendarEventsResponse,
    CalendarConnection,
)
from app.services.calendar_service import CalendarService

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("", response_model=CalendarEventsResponse)
def list_events(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if start is None or end is None:
        raise ValidationError("start and end dates required")
    return {"events": CalendarService(db, current_user).list_events(start, end)}


@router.post("", response_model=CalendarEventResponse, status_code=201)
def create_event(
    payload: CalendarEventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CalendarService(db, current_user).create_event(payload)


@router.put("/connection")
def set_connection(
    payload: CalendarConnection,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    connected = CalendarService(db, current_user).set_connection(payload.access_token)
    return {"connected": connected}
