from typing import Dict, List, Optional
from app.schemas.common import CamelModel

class ImportDetails(CamelModel):
    total: int
    created: int
    skipped: int
    errors: List[str]

class ImportResponse(CamelModel):
    success: bool
    message: str
    details: ImportDetails

class PreviewLead(CamelModel):
    first_name: str
    last_name: str
    street: str
    city: str
    state: str
    zip_code: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source: Optional[str] = None
    description: Optional[str] = None

class ImportPreviewResponse(CamelModel):
    headers: List[str]
    rows: List[Dict[str, str]]
    leads: List[Optional[PreviewLead]]
    total_rows: int
