from datetime import datetime
from typing import List, Optional
from pydantic import Field, field_validator, model_validator

from app.models.enums import DoorOutcome
from app.schemas.common import CamelModel, Pagination, PersonSummary

DOOR_KNOCKER = "Door Knocker"


class DoorActivityCreate(CamelModel):
    outcome: DoorOutcome
    notes: Optional[str] = None
    left_materials: bool = False
    materials_type: Optional[str] = None
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    photo_url: Optional[str] = None
    lead_id: Optional[str] = None
    contact_id: Optional[str] = None
    street: str
    city: str
    state: str
    zip_code: str

    @field_validator("street", "city", "state", "zip_code")
    @classmethod
    def strip_address(cls, v):
        return v.strip()

    @model_validator(mode="after")
    def door_knocker_needs_photo(self):
        if self.left_materials and self.materials_type == DOOR_KNOCKER and not self.photo_url:
            raise ValueError("A photo is required when leaving a door knocker")
        return self


class DoorActivityResponse(CamelModel):
    id: str
    outcome: DoorOutcome
    notes: Optional[str] = None
    left_materials: bool
    materials_type: Optional[str] = None
    latitude: float
    longitude: float
    photo_url: Optional[str] = None
    user_id: str
    lead_id: Optional[str] = None
    contact_id: Optional[str] = None
    created_at: Optional[datetime] = None

    lead: Optional[PersonSummary] = None
    contact: Optional[PersonSummary] = None


class DoorActivityListResponse(CamelModel):
    data: List[DoorActivityResponse]
    pagination: Pagination
