from datetime import datetime
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey
from app.core.database import Base, new_id
from app.models.enums import CalendarProvider

class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(String, primary_key=True, default=new_id)

    title = Column(String, nullable=False)
    description = Column(Text)
    location = Column(String)
    start_time = Column(TIMESTAMP, nullable=False, index=True)
    end_time = Column(TIMESTAMP, nullable=False)

    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True)

    # Sync state
    provider = Column(String, default=CalendarProvider.LOCAL.value)  # 'LOCAL' | 'GOOGLE'
    external_id = Column(String, nullable=True)
    synced_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
