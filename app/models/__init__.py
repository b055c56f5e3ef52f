from .user import User
from .territory import Territory
from .lead import Lead
from .activity import Activity
from .door_activity import DoorActivity
from .contact import Contact
from .crm_account import CRMAccount
from .opportunity import Opportunity
from .task import Task
from .calendar_event import CalendarEvent
from .enums import (
    UserRole,
    LeadStatus,
    DoorOutcome,
    OpportunityStage,
    TaskStatus,
    TaskPriority,
    CalendarProvider,
)

__all__ = [
    "User",
    "Territory",
    "Lead",
    "Activity",
    "DoorActivity",
    "Contact",
    "CRMAccount",
    "Opportunity",
    "Task",
    "CalendarEvent",
    "UserRole",
    "LeadStatus",
    "DoorOutcome",
    "OpportunityStage",
    "TaskStatus",
    "TaskPriority",
    "CalendarProvider",
]
