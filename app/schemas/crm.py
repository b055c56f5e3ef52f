"""Contacts, accounts, opportunities and tasks."""
from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field

from app.models.enums import OpportunityStage, TaskStatus, TaskPriority
from app.schemas.common import CamelModel, NamedSummary, PersonSummary, UserSummary


# --- CONTACTS ---
class ContactCreate(CamelModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    job_title: Optional[str] = None
    department: Optional[str] = None
    description: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    account_id: Optional[str] = None

class ContactResponse(ContactCreate):
    id: str
    email: Optional[str] = None
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None
    account: Optional[NamedSummary] = None


# --- ACCOUNTS ---
class AccountCreate(CamelModel):
    name: str = Field(min_length=1)
    website: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    phone: Optional[str] = None
    annual_revenue: Optional[float] = Field(None, ge=0)
    employees: Optional[int] = Field(None, ge=0)
    billing_street: Optional[str] = None
    billing_city: Optional[str] = None
    billing_state: Optional[str] = None
    billing_zip_code: Optional[str] = None
    billing_country: Optional[str] = None
    shipping_street: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_zip_code: Optional[str] = None
    shipping_country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

class AccountResponse(AccountCreate):
    id: str
    owner_id: Optional[str] = None
    created_at: Optional[datetime] = None
    contact_count: int = 0
    opportunity_count: int = 0


# --- OPPORTUNITIES ---
class OpportunityCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    stage: Optional[OpportunityStage] = None
    amount: Optional[float] = Field(None, ge=0)
    probability: Optional[int] = Field(None, ge=0, le=100)
    expected_close_date: Optional[datetime] = None
    account_id: Optional[str] = None
    contact_id: Optional[str] = None

class OpportunityResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    stage: OpportunityStage
    amount: Optional[float] = None
    probability: Optional[int] = None
    expected_close_date: Optional[datetime] = None
    account_id: Optional[str] = None
    contact_id: Optional[str] = None
    assigned_to_id: Optional[str] = None
    created_at: Optional[datetime] = None

    account: Optional[NamedSummary] = None
    contact: Optional[PersonSummary] = None
    assigned_to: Optional[UserSummary] = None


# --- TASKS ---
class TaskCreate(CamelModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    contact_id: Optional[str] = None
    lead_id: Optional[str] = None
    opportunity_id: Optional[str] = None

class TaskResponse(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[datetime] = None
    assigned_to_id: Optional[str] = None
    contact_id: Optional[str] = None
    lead_id: Optional[str] = None
    opportunity_id: Optional[str] = None
    created_at: Optional[datetime] = None

    assigned_to: Optional[UserSummary] = None
    contact: Optional[PersonSummary] = None
    lead: Optional[PersonSummary] = None
    opportunity: Optional[NamedSummary] = None
