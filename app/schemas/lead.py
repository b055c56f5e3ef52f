from datetime import datetime
from typing import List, Optional
from pydantic import EmailStr, Field, field_validator

from app.models.enums import LeadStatus, DoorOutcome, TaskStatus, TaskPriority
from app.schemas.common import CamelModel, Pagination, UserSummary


# Shared writable fields
class LeadFields(CamelModel):
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    status: Optional[LeadStatus] = None
    source: Optional[str] = None
    estimated_value: Optional[float] = Field(None, ge=0)
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    territory_id: Optional[str] = None


class LeadCreate(LeadFields):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class LeadUpdate(LeadFields):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    assigned_to_id: Optional[str] = None

    @field_validator("first_name", "last_name", "status")
    @classmethod
    def not_null(cls, v):
        # May be omitted, but never cleared
        if v is None:
            raise ValueError("may not be null")
        return v


class TerritorySchema(CamelModel):
    id: str
    name: str
    description: Optional[str] = None


class LeadResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    website: Optional[str] = None
    description: Optional[str] = None
    status: LeadStatus
    source: Optional[str] = None
    estimated_value: Optional[float] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    photo_url: Optional[str] = None
    assigned_to_id: Optional[str] = None
    assigned_admin_id: Optional[str] = None
    territory_id: Optional[str] = None
    last_activity_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    assigned_to: Optional[UserSummary] = None
    territory: Optional[TerritorySchema] = None


class LeadListResponse(CamelModel):
    data: List[LeadResponse]
    pagination: Pagination


# --- Detail view children ---
class LeadActivityItem(CamelModel):
    id: str
    type: str
    subject: Optional[str] = None
    description: Optional[str] = None
    date_time: Optional[datetime] = None


class LeadTaskItem(CamelModel):
    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None


class LeadDoorActivityItem(CamelModel):
    id: str
    outcome: DoorOutcome
    notes: Optional[str] = None
    latitude: float
    longitude: float
    created_at: Optional[datetime] = None


class LeadDetail(LeadResponse):
    activities: List[LeadActivityItem] = []
    tasks: List[LeadTaskItem] = []
    door_activities: List[LeadDoorActivityItem] = []


# --- Reassignment ---
class LeadAssignRequest(CamelModel):
    assigned_to_id: str = Field(min_length=1)


class BulkAssignRequest(CamelModel):
    lead_ids: List[str] = Field(min_length=1)
    assigned_to_id: str = Field(min_length=1)


class BulkAssignResponse(CamelModel):
    message: str
    count: int
