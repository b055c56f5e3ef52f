from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.crm import (
    ContactCreate,
    ContactResponse,
    AccountCreate,
    AccountResponse,
    OpportunityCreate,
    OpportunityResponse,
    TaskCreate,
    TaskResponse,
)
from app.services.crm_service import CRMService

router = APIRouter(tags=["CRM Records"])


# =========================================================
# 1. CONTACTS
# =========================================================

@router.get("/contacts", response_model=List[ContactResponse])
def list_contacts(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CRMService(db, current_user).list_contacts()


@router.post("/contacts", response_model=ContactResponse, status_code=201)
def create_contact(
    payload: ContactCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CRMService(db, current_user).create_contact(payload)


# =========================================================
# 2. ACCOUNTS
# =========================================================

@router.get("/accounts", response_model=List[AccountResponse])
def list_accounts(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CRMService(db, current_user).list_accounts()


@router.post("/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    payload: AccountCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CRMService(db, current_user).create_account(payload)


# =========================================================
# 3. OPPORTUNITIES
# =========================================================

@router.get("/opportunities", response_model=List[OpportunityResponse])
def list_opportunities(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CRMService(db, current_user).list_opportunities()


@router.post("/opportunities", response_model=OpportunityResponse, status_code=201)
def create_opportunity(
    payload: OpportunityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CRMService(db, current_user).create_opportunity(payload)


# =========================================================
# 4. TASKS
# =========================================================

@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return CRMService(db, current_user).list_tasks()


@router.post("/tasks", response_model=TaskResponse, status_code=201)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return CRMService(db, current_user).create_task(payload)
