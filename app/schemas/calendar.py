from datetime import datetime
from typing import List, Optional
from pydantic import Field, model_validator
from app.schemas.common import CamelModel

class CalendarEventCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: datetime
    sync_to_google: bool = False

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time < self.start_time:
            raise ValueError("endTime must not be before startTime")
        return self

class CalendarEventResponse(CamelModel):
    id: Optional[str] = None
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: datetime
    provider: str = "LOCAL"
    external_id: Optional[str] = None
    synced_at: Optional[datetime] = None

class CalendarEventsResponse(CamelModel):
    events: List[CalendarEventResponse]

class CalendarConnection(CamelModel):
    access_token: Optional[str] = None
