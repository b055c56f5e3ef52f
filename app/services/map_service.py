"""
Map marker projection.

`build_markers` is a pure fan-in over already-scoped records: leads,
contacts, accounts and door activities become one flat marker list.
`MapService` runs the four scoped queries for a viewer.
"""
import math
from dataclasses import dataclass
from itertools import chain
from typing import Dict, Iterable, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.contact import Contact
from app.models.crm_account import CRMAccount
from app.models.door_activity import DoorActivity
from app.models.lead import Lead
from app.models.user import User

STATUS_COLORS = {
    "NEW": "#3b82f6",
    "CONTACTED": "#8b5cf6",
    "QUALIFIED": "#10b981",
    "UNQUALIFIED": "#f59e0b",
    "CONVERTED": "#059669",
    "DEAD": "#ef4444",
}

TYPE_COLORS = {
    "lead": "#3b82f6",
    "contact": "#06b6d4",
    "account": "#f97316",
    "activity": "#6366f1",
}

DEFAULT_COLOR = "#64748b"

# Owner colors for the admin view, handed out in first-seen order
OWNER_PALETTE = [
    "#e6194b",
    "#3cb44b",
    "#4363d8",
    "#f58231",
    "#911eb4",
    "#46f0f0",
    "#f032e6",
    "#bcf60c",
    "#008080",
    "#9a6324",
]


@dataclass
class MarkerFilters:
    leads: bool = True
    contacts: bool = True
    accounts: bool = True
    activities: bool = False


def _value(v):
    return getattr(v, "value", v)


def _place(city, state) -> Optional[str]:
    return ", ".join(p for p in (city, state) if p) or None


def _has_coordinates(record) -> bool:
    lat, lng = record.latitude, record.longitude
    return lat is not None and lng is not None and math.isfinite(lat) and math.isfinite(lng)


def owner_of(record) -> Optional[str]:
    if isinstance(record, Lead):
        return record.assigned_to_id
    if isinstance(record, DoorActivity):
        return record.user_id
    return getattr(record, "owner_id", None)


def assign_owner_colors(*collections: Iterable) -> Dict[str, str]:
    colors = {}
    for record in chain(*collections):
        owner = owner_of(record)
        if owner and owner not in colors:
            colors[owner] = OWNER_PALETTE[len(colors) % len(OWNER_PALETTE)]
    return colors


def status_color(marker_type: str, status: Optional[str]) -> str:
    if status and status in STATUS_COLORS:
        return STATUS_COLORS[status]
    return TYPE_COLORS.get(marker_type, DEFAULT_COLOR)


def _lead_marker(lead: Lead) -> dict:
    return {
        "id": f"lead-{lead.id}",
        "latitude": lead.latitude,
        "longitude": lead.longitude,
        "type": "lead",
        "status": _value(lead.status),
        "title": f"{lead.first_name} {lead.last_name}",
        "description": lead.company or _place(lead.city, lead.state),
    }


def _contact_marker(contact: Contact) -> dict:
    return {
        "id": f"contact-{contact.id}",
        "latitude": contact.latitude,
        "longitude": contact.longitude,
        "type": "contact",
        "status": None,
        "title": f"{contact.first_name} {contact.last_name}",
        "description": _place(contact.city, contact.state),
    }


def _account_marker(account: CRMAccount) -> dict:
    return {
        "id": f"account-{account.id}",
        "latitude": account.latitude,
        "longitude": account.longitude,
        "type": "account",
        "status": None,
        "title": account.name,
        "description": account.industry or _place(account.billing_city, account.billing_state),
    }


def _activity_marker(activity: DoorActivity) -> dict:
    outcome = _value(activity.outcome)
    if activity.notes:
        description = activity.notes[:50]
    elif activity.created_at:
        description = activity.created_at.date().isoformat()
    else:
        description = None
    return {
        "id": f"activity-{activity.id}",
        "latitude": activity.latitude,
        "longitude": activity.longitude,
        "type": "activity",
        "status": outcome,
        "title": outcome.replace("_", " "),
        "description": description,
    }


def build_markers(
    leads: List[Lead],
    contacts: List[Contact],
    accounts: List[CRMAccount],
    activities: List[DoorActivity],
    viewer_is_admin: bool,
    filters: Optional[MarkerFilters] = None,
) -> List[dict]:
    filters = filters or MarkerFilters()

    # Colors come from every input record so they stay put when toggling layers
    owner_colors = assign_owner_colors(leads, contacts, accounts, activities) if viewer_is_admin else {}

    sources = [
        (filters.leads, leads, _lead_marker),
        (filters.contacts, contacts, _contact_marker),
        (filters.accounts, accounts, _account_marker),
        (filters.activities, activities, _activity_marker),
    ]

    markers = []
    for enabled, records, project in sources:
        if not enabled:
            continue
        for record in records:
            if not _has_coordinates(record):
                continue
            marker = project(record)
            if viewer_is_admin:
                marker["color"] = owner_colors.get(owner_of(record), DEFAULT_COLOR)
            else:
                marker["color"] = status_color(marker["type"], marker["status"])
            markers.append(marker)

    return markers


class MapService:
    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor

    def _scoped(self, model, owner_column):
        query = self.db.query(model)
        if not self.actor.is_admin:
            query = query.filter(owner_column == self.actor.id)
        return query

    def fetch(self):
        leads = self._scoped(Lead, Lead.assigned_to_id)\
            .filter(Lead.latitude.isnot(None), Lead.longitude.isnot(None))\
            .all()
        contacts = self._scoped(Contact, Contact.owner_id)\
            .filter(Contact.latitude.isnot(None), Contact.longitude.isnot(None))\
            .all()
        accounts = self._scoped(CRMAccount, CRMAccount.owner_id)\
            .filter(CRMAccount.latitude.isnot(None), CRMAccount.longitude.isnot(None))\
            .all()
        activities = self._scoped(DoorActivity, DoorActivity.user_id)\
            .order_by(desc(DoorActivity.created_at))\
            .limit(settings.MAP_ACTIVITY_LIMIT).all()
        return leads, contacts, accounts, activities

    def get_map(self, filters: MarkerFilters) -> dict:
        leads, contacts, accounts, activities = self.fetch()
        markers = build_markers(leads, contacts, accounts, activities, self.actor.is_admin, filters)
        return {
            "markers": markers,
            "stats": {
                "leads": len(leads),
                "contacts": len(contacts),
                "accounts": len(accounts),
                "activities": len(activities),
            },
        }
