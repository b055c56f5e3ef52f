from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth import require_admin
from app.core.database import get_db
from app.models.user import User
from app.schemas.auth import UserListItem
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[UserListItem])
def list_users(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return UserService(db).list_with_lead_counts()
