import logging
from sqlalchemy import asc, desc, func
from sqlalchemy.orm import Session, joinedload

from app.models.contact import Contact
from app.models.crm_account import CRMAccount
from app.models.enums import OpportunityStage, TaskPriority, TaskStatus
from app.models.opportunity import Opportunity
from app.models.task import Task
from app.models.user import User
from app.schemas.crm import AccountCreate, ContactCreate, OpportunityCreate, TaskCreate

logger = logging.getLogger(__name__)

CLOSED_STAGES = (OpportunityStage.CLOSED_WON, OpportunityStage.CLOSED_LOST)


class CRMService:
    """Contacts, accounts, opportunities and tasks."""

    def __init__(self, db: Session, actor: User):
        self.db = db
        self.actor = actor

    # ---------------------------------------------------------
    # CONTACTS (shared across the team)
    # ---------------------------------------------------------
    def list_contacts(self):
        return self.db.query(Contact)\
            .options(joinedload(Contact.account))\
            .order_by(desc(Contact.created_at))\
            .all()

    def create_contact(self, data: ContactCreate) -> Contact:
        contact = Contact(**data.model_dump(exclude_unset=True), owner_id=self.actor.id)
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)
        return contact

    # ---------------------------------------------------------
    # ACCOUNTS (shared across the team)
    # ---------------------------------------------------------
    def list_accounts(self):
        contact_counts = self.db.query(Contact.account_id, func.count(Contact.id))\
            .group_by(Contact.account_id).all()
        opportunity_counts = self.db.query(Opportunity.account_id, func.count(Opportunity.id))\
            .group_by(Opportunity.account_id).all()
        contacts_by_account = dict(contact_counts)
        opportunities_by_account = dict(opportunity_counts)

        accounts = self.db.query(CRMAccount).order_by(desc(CRMAccount.created_at)).all()

        data = []
        for account in accounts:
            row = {c.name: getattr(account, c.name) for c in account.__table__.columns}
            row["contact_count"] = contacts_by_account.get(account.id, 0)
            row["opportunity_count"] = opportunities_by_account.get(account.id, 0)
            data.append(row)
        return data

    def create_account(self, data: AccountCreate) -> CRMAccount:
        account = CRMAccount(**data.model_dump(exclude_unset=True), owner_id=self.actor.id)
        self.db.add(account)
        self.db.commit()
        self.db.refresh(account)
        return account

    # ---------------------------------------------------------
    # OPPORTUNITIES (own only)
    # ---------------------------------------------------------
    def list_opportunities(self):
        return self.db.query(Opportunity)\
            .filter(Opportunity.assigned_to_id == self.actor.id)\
            .options(
                joinedload(Opportunity.account),
                joinedload(Opportunity.contact),
                joinedload(Opportunity.assigned_to),
            )\
            .order_by(desc(Opportunity.created_at))\
            .all()

    def create_opportunity(self, data: OpportunityCreate) -> Opportunity:
        fields = data.model_dump(exclude_unset=True)
        fields["stage"] = fields.get("stage") or OpportunityStage.PROSPECTING
        if fields.get("probability") is None:
            fields["probability"] = 0

        opportunity = Opportunity(**fields, assigned_to_id=self.actor.id)
        self.db.add(opportunity)
        self.db.commit()
        self.db.refresh(opportunity)
        return opportunity

    def pipeline_summary(self) -> dict:
        query = self.db.query(Opportunity).filter(Opportunity.stage.notin_(CLOSED_STAGES))
        if not self.actor.is_admin:
            query = query.filter(Opportunity.assigned_to_id == self.actor.id)

        value = query.with_entities(func.sum(Opportunity.amount)).scalar() or 0
        return {"open_opportunities": query.count(), "pipeline_value": float(value)}

    # ---------------------------------------------------------
    # TASKS (own only)
    # ---------------------------------------------------------
    def list_tasks(self):
        return self.db.query(Task)\
            .filter(Task.assigned_to_id == self.actor.id)\
            .options(
                joinedload(Task.assigned_to),
                joinedload(Task.contact),
                joinedload(Task.lead),
                joinedload(Task.opportunity),
            )\
            .order_by(asc(Task.due_date))\
            .all()

    def create_task(self, data: TaskCreate) -> Task:
        fields = data.model_dump(exclude_unset=True)
        fields["status"] = fields.get("status") or TaskStatus.NOT_STARTED
        fields["priority"] = fields.get("priority") or TaskPriority.MEDIUM

        task = Task(**fields, assigned_to_id=self.actor.id)
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def count_contacts(self) -> int:
        query = self.db.query(func.count(Contact.id))
        if not self.actor.is_admin:
            query = query.filter(Contact.owner_id == self.actor.id)
        return query.scalar() or 0
