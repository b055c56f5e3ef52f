import logging
from datetime import datetime, date, timedelta
from typing import Optional

from sqlalchemy import desc, asc, func
from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFoundError
from app.models.door_activity import DoorActivity
from app.models.enums import DoorOutcome, LeadStatus
from app.models.lead import Lead
from app.models.user import User
from app.schemas.common import paginate
from app.schemas.door_activity import DoorActivityCreate
from app.services.lead_service import LeadService

logger = logging.getLogger(__name__)

PLACEHOLDER_FIRST_NAME = "Unknown"
PLACEHOLDER_LAST_NAME = "Resident"

# Outcomes that move the visited lead along the pipeline
OUTCOME_STATUS = {
    DoorOutcome.INTERESTED: LeadStatus.CONTACTED,
    DoorOutcome.APPOINTMENT_SET: LeadStatus.QUALIFIED,
}

# Pipeline position; a visit may only move a lead to a higher rank
STATUS_RANK = {
    LeadStatus.NEW: 0,
    LeadStatus.UNQUALIFIED: 0,
    LeadStatus.CONTACTED: 1,
    LeadStatus.QUALIFIED: 2,
    LeadStatus.CONVERTED: 3,
    LeadStatus.DEAD: 3,
}


def initial_status(outcome: DoorOutcome) -> LeadStatus:
    return OUTCOME_STATUS.get(outcome, LeadStatus.NEW)


def cascade_status(current: LeadStatus, outcome: DoorOutcome) -> LeadStatus:
    target = OUTCOME_STATUS.get(outcome)
    if target is None:
        return current
    if STATUS_RANK[target] > STATUS_RANK[current]:
        return target
    return current


class DoorActivityService:
    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor
        self.leads = LeadService(db, actor)

    # ---------------------------------------------------------
    # 1. LEAD RESOLUTION
    # ---------------------------------------------------------
    def find_lead_by_address(self, street: str, zip_code: str) -> Optional[Lead]:
        # Exact, case-insensitive match on street + zip across all owners
        return self.db.query(Lead)\
            .filter(
                func.lower(func.trim(Lead.street)) == street.strip().lower(),
                func.lower(func.trim(Lead.zip_code)) == zip_code.strip().lower(),
            )\
            .order_by(asc(Lead.created_at))\
            .first()

    def _resolve_lead(self, data: DoorActivityCreate) -> Lead:
        if data.lead_id:
            return self.leads.get_lead(data.lead_id)

        existing = self.find_lead_by_address(data.street, data.zip_code)
        if existing:
            return existing

        lead = Lead(
            first_name=PLACEHOLDER_FIRST_NAME,
            last_name=PLACEHOLDER_LAST_NAME,
            street=data.street,
            city=data.city,
            state=data.state,
            zip_code=data.zip_code,
            latitude=data.latitude,
            longitude=data.longitude,
            photo_url=data.photo_url,
            status=initial_status(data.outcome),
            assigned_to_id=self.actor.id,
        )
        self.db.add(lead)
        self.db.flush()
        logger.info(f"Created lead {lead.id} from door visit at {data.street}, {data.zip_code}")
        return lead

    # ---------------------------------------------------------
    # 2. RECORD A VISIT
    # ---------------------------------------------------------
    def record(self, data: DoorActivityCreate) -> DoorActivity:
        """
        Writes the visit and the lead update as one transaction: either both
        the (new or touched) lead and the activity row land, or neither.
        """
        try:
            lead = self._resolve_lead(data)
            self.leads.touch(lead, data.photo_url)

            activity = DoorActivity(
                outcome=data.outcome,
                notes=data.notes,
                left_materials=data.left_materials,
                materials_type=data.materials_type,
                latitude=data.latitude,
                longitude=data.longitude,
                photo_url=data.photo_url,
                user_id=self.actor.id,
                lead_id=lead.id,
                contact_id=data.contact_id,
            )
            self.db.add(activity)

            lead.status = cascade_status(lead.status, data.outcome)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(activity)
        logger.info(f"Door activity {activity.id} ({data.outcome.value}) logged by {self.actor.id} on lead {lead.id}")
        return activity

    # ---------------------------------------------------------
    # 3. LIST (own visits only)
    # ---------------------------------------------------------
    def list_activities(self, page: int = 1, limit: int = 50, day: Optional[date] = None):
        query = self.db.query(DoorActivity).filter(DoorActivity.user_id == self.actor.id)

        if day:
            start = datetime.combine(day, datetime.min.time())
            query = query.filter(
                DoorActivity.created_at >= start,
                DoorActivity.created_at < start + timedelta(days=1),
            )

        total = query.count()
        activities = query.options(joinedload(DoorActivity.lead), joinedload(DoorActivity.contact))\
                          .order_by(desc(DoorActivity.created_at))\
                          .offset((page - 1) * limit)\
                          .limit(limit).all()

        return {"data": activities, "pagination": paginate(page, limit, total)}

    def get_activity(self, activity_id: str) -> DoorActivity:
        activity = self.db.query(DoorActivity)\
            .filter(DoorActivity.id == activity_id, DoorActivity.user_id == self.actor.id)\
            .first()
        if not activity:
            raise NotFoundError("Door activity not found")
        return activity
