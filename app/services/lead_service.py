import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc, asc, or_
from sqlalchemy.orm import Session, joinedload

from app.core.errors import AuthorizationError, NotFoundError
from app.models.activity import Activity
from app.models.door_activity import DoorActivity
from app.models.enums import LeadStatus, TaskStatus
from app.models.lead import Lead
from app.models.task import Task
from app.models.user import User
from app.schemas.common import paginate
from app.schemas.lead import LeadCreate, LeadUpdate, LeadResponse

logger = logging.getLogger(__name__)


class LeadService:
    """
    Lead store scoped to one actor.

    Every lookup starts from `_scoped_query()`, so a rep never sees or
    touches a lead owned by someone else: such leads are simply not found.
    """

    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor

    # ---------------------------------------------------------
    # SCOPING
    # ---------------------------------------------------------
    def _scoped_query(self):
        query = self.db.query(Lead)
        if not self.actor.is_admin:
            query = query.filter(Lead.assigned_to_id == self.actor.id)
        return query

    def _get_scoped(self, lead_id: str) -> Lead:
        lead = self._scoped_query().filter(Lead.id == lead_id).first()
        if not lead:
            raise NotFoundError("Lead not found")
        return lead

    def _get_target_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("Target user not found")
        return user

    # ---------------------------------------------------------
    # 1. LIST
    # ---------------------------------------------------------
    def list_leads(
        self,
        page: int = 1,
        limit: int = 20,
        status: Optional[LeadStatus] = None,
        search: Optional[str] = None,
    ):
        query = self._scoped_query()

        if status:
            query = query.filter(Lead.status == status)

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Lead.first_name.ilike(pattern),
                Lead.last_name.ilike(pattern),
                Lead.email.ilike(pattern),
                Lead.company.ilike(pattern),
            ))

        total = query.count()
        leads = query.options(joinedload(Lead.assigned_to), joinedload(Lead.territory))\
                     .order_by(desc(Lead.created_at))\
                     .offset((page - 1) * limit)\
                     .limit(limit).all()

        return {"data": leads, "pagination": paginate(page, limit, total)}

    # ---------------------------------------------------------
    # 2. CREATE
    # ---------------------------------------------------------
    def create_lead(self, data: LeadCreate) -> Lead:
        fields = data.model_dump(exclude_unset=True)
        if fields.get("status") is None:
            fields["status"] = LeadStatus.NEW

        lead = Lead(**fields, assigned_to_id=self.actor.id)
        self.db.add(lead)
        self.db.commit()
        self.db.refresh(lead)

        logger.info(f"Lead {lead.id} created by {self.actor.id}")
        return lead

    # ---------------------------------------------------------
    # 3. READ ONE (detail view)
    # ---------------------------------------------------------
    def get_lead(self, lead_id: str) -> Lead:
        return self._get_scoped(lead_id)

    def get_lead_detail(self, lead_id: str) -> dict:
        lead = self._get_scoped(lead_id)

        activities = self.db.query(Activity)\
            .filter(Activity.lead_id == lead.id)\
            .order_by(desc(Activity.date_time))\
            .limit(10).all()

        open_tasks = self.db.query(Task)\
            .filter(Task.lead_id == lead.id, Task.status != TaskStatus.COMPLETED)\
            .order_by(asc(Task.due_date))\
            .limit(5).all()

        door_activities = self.db.query(DoorActivity)\
            .filter(DoorActivity.lead_id == lead.id)\
            .order_by(desc(DoorActivity.created_at))\
            .limit(10).all()

        detail = LeadResponse.model_validate(lead).model_dump()
        detail["activities"] = activities
        detail["tasks"] = open_tasks
        detail["door_activities"] = door_activities
        return detail

    # ---------------------------------------------------------
    # 4. UPDATE
    # ---------------------------------------------------------
    def update_lead(self, lead_id: str, data: LeadUpdate) -> Lead:
        lead = self._get_scoped(lead_id)

        changes = data.model_dump(exclude_unset=True)
        owner_changed = "assigned_to_id" in changes
        new_owner_id = changes.pop("assigned_to_id", None)
        new_owner = self._get_target_user(new_owner_id) if new_owner_id else None

        for key, value in changes.items():
            setattr(lead, key, value)

        # Ownership goes through the same rule as /assign
        if owner_changed:
            if new_owner:
                self._apply_reassignment(lead, new_owner)
            else:
                self._release_to_pool(lead)

        self.db.commit()
        self.db.refresh(lead)
        return lead

    # ---------------------------------------------------------
    # 5. DELETE
    # ---------------------------------------------------------
    def delete_lead(self, lead_id: str) -> bool:
        lead = self._get_scoped(lead_id)
        self.db.delete(lead)
        self.db.commit()

        logger.info(f"Lead {lead_id} deleted by {self.actor.id}")
        return True

    # ---------------------------------------------------------
    # 6. REASSIGNMENT
    # ---------------------------------------------------------
    def _apply_reassignment(self, lead: Lead, new_owner: User) -> bool:
        """
        Moves `lead` to `new_owner`. When the lead is leaving an admin and
        no overseeing admin is recorded yet, that admin becomes the
        overseeing admin. Returns False when nothing changed.
        """
        if lead.assigned_to_id == new_owner.id:
            return False

        current_owner = lead.assigned_to
        if current_owner is not None and current_owner.is_admin and not lead.assigned_admin_id:
            lead.assigned_admin_id = current_owner.id

        lead.assigned_to_id = new_owner.id
        lead.assigned_to = new_owner
        return True

    def _release_to_pool(self, lead: Lead):
        current_owner = lead.assigned_to
        if current_owner is not None and current_owner.is_admin and not lead.assigned_admin_id:
            lead.assigned_admin_id = current_owner.id
        lead.assigned_to_id = None
        lead.assigned_to = None

    def reassign(self, lead_id: str, new_owner_id: str) -> Lead:
        lead = self._get_scoped(lead_id)
        new_owner = self._get_target_user(new_owner_id)

        if self._apply_reassignment(lead, new_owner):
            self.db.commit()
            self.db.refresh(lead)
            logger.info(f"Lead {lead.id} reassigned to {new_owner.id} by {self.actor.id}")

        return lead

    def bulk_reassign(self, lead_ids: List[str], new_owner_id: str) -> dict:
        if not self.actor.is_admin:
            raise AuthorizationError("Only admins can bulk reassign leads")

        new_owner = self._get_target_user(new_owner_id)

        # Each lead is inspected on its own so the oversight chain is kept per lead
        leads = self.db.query(Lead)\
            .options(joinedload(Lead.assigned_to))\
            .filter(Lead.id.in_(set(lead_ids)))\
            .all()

        for lead in leads:
            self._apply_reassignment(lead, new_owner)

        self.db.commit()

        count = len(leads)
        logger.info(f"Bulk reassigned {count}/{len(lead_ids)} leads to {new_owner.id}")
        return {
            "message": f"Successfully reassigned {count} leads",
            "count": count,
        }

    # ---------------------------------------------------------
    # 7. HELPERS
    # ---------------------------------------------------------
    def touch(self, lead: Lead, photo_url: Optional[str] = None):
        if photo_url:
            lead.photo_url = photo_url
        lead.last_activity_at = datetime.utcnow()

    def count(self) -> int:
        return self._scoped_query().count()
