from typing import Any, Dict
from app.schemas.common import CamelModel

class AIRequest(CamelModel):
    action: str
    params: Dict[str, Any] = {}

class AIResponse(CamelModel):
    result: Any
