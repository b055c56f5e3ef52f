from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.ai import AIRequest, AIResponse
from app.services.ai_service import AIService

router = APIRouter(prefix="/ai", tags=["AI Assistant"])


@router.post("", response_model=AIResponse)
def run_action(
    payload: AIRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"result": AIService(db, current_user).run(payload.action, payload.params)}
