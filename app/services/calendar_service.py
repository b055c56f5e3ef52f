import logging
from datetime import datetime, timezone
from typing import List, Optional

import requests
from sqlalchemy import asc
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.calendar_event import CalendarEvent
from app.models.enums import CalendarProvider
from app.models.user import User
from app.schemas.calendar import CalendarEventCreate

logger = logging.getLogger(__name__)


def naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _parse_when(block: Optional[dict]) -> Optional[datetime]:
    if not block:
        return None
    raw = block.get("dateTime") or block.get("date")
    if not raw:
        return None
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


class GoogleCalendarClient:
    """Thin wrapper over the Calendar v3 REST API for the primary calendar."""

    def __init__(self, access_token: str):
        self.access_token = access_token
        self.base = f"{settings.GOOGLE_CALENDAR_API_URL}/calendars/primary/events"

    def _headers(self):
        return {"Authorization": f"Bearer {self.access_token}"}

    def list_events(self, start: datetime, end: datetime) -> List[dict]:
        params = {
            "timeMin": start.isoformat() + ("Z" if start.tzinfo is None else ""),
            "timeMax": end.isoformat() + ("Z" if end.tzinfo is None else ""),
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": 100,
        }
        r = requests.get(self.base, headers=self._headers(), params=params,
                         timeout=settings.CALENDAR_TIMEOUT_SECONDS)
        r.raise_for_status()

        events = []
        for item in r.json().get("items", []):
            events.append({
                "id": item.get("id"),
                "title": item.get("summary") or "Untitled",
                "description": item.get("description"),
                "location": item.get("location"),
                "start_time": _parse_when(item.get("start")),
                "end_time": _parse_when(item.get("end")),
                "provider": CalendarProvider.GOOGLE.value,
                "external_id": item.get("id"),
            })
        return [e for e in events if e["start_time"] and e["end_time"]]

    def create_event(self, data: CalendarEventCreate) -> dict:
        body = {
            "summary": data.title,
            "description": data.description,
            "location": data.location,
            "start": {"dateTime": data.start_time.isoformat(), "timeZone": "UTC"},
            "end": {"dateTime": data.end_time.isoformat(), "timeZone": "UTC"},
        }
        r = requests.post(self.base, headers=self._headers(), json=body,
                          timeout=settings.CALENDAR_TIMEOUT_SECONDS)
        r.raise_for_status()
        return r.json()


class CalendarService:
    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor

    def _client(self) -> Optional[GoogleCalendarClient]:
        if not self.actor.calendar_access_token:
            return None
        return GoogleCalendarClient(self.actor.calendar_access_token)

    def list_events(self, start: datetime, end: datetime) -> List:
        start, end = naive_utc(start), naive_utc(end)
        google_events = []
        client = self._client()
        if client:
            try:
                google_events = client.list_events(start, end)
            except (requests.RequestException, ValueError) as e:
                logger.warning(f"Google Calendar fetch failed for {self.actor.id}: {e}")

        local_events = self.db.query(CalendarEvent)\
            .filter(
                CalendarEvent.user_id == self.actor.id,
                CalendarEvent.start_time >= start,
                CalendarEvent.end_time <= end,
            )\
            .order_by(asc(CalendarEvent.start_time))\
            .all()

        return google_events + local_events

    def create_event(self, data: CalendarEventCreate) -> CalendarEvent:
        external_id = None
        client = self._client()
        if data.sync_to_google and client:
            try:
                external_id = client.create_event(data).get("id")
            except requests.RequestException as e:
                logger.error(f"Google Calendar create failed for {self.actor.id}: {e}")

        event = CalendarEvent(
            title=data.title,
            description=data.description,
            location=data.location,
            start_time=naive_utc(data.start_time),
            end_time=naive_utc(data.end_time),
            user_id=self.actor.id,
            provider=(CalendarProvider.GOOGLE if external_id else CalendarProvider.LOCAL).value,
            external_id=external_id,
            synced_at=datetime.utcnow() if external_id else None,
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        logger.info(f"Calendar event {event.id} created by {self.actor.id} ({event.provider})")
        return event

    def set_connection(self, access_token: Optional[str]) -> bool:
        self.actor.calendar_access_token = access_token or None
        self.db.commit()
        return self.actor.calendar_access_token is not None
