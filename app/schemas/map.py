from typing import List, Literal, Optional
from app.schemas.common import CamelModel

MarkerType = Literal["lead", "contact", "account", "activity"]

class MapMarker(CamelModel):
    id: str
    latitude: float
    longitude: float
    type: MarkerType
    status: Optional[str] = None
    title: str
    description: Optional[str] = None
    color: Optional[str] = None

class MapStats(CamelModel):
    leads: int
    contacts: int
    accounts: int
    activities: int

class MapResponse(CamelModel):
    markers: List[MapMarker]
    stats: MapStats
