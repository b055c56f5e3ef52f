from datetime import datetime
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id

class Activity(Base):
    __tablename__ = "activities"

    id = Column(String, primary_key=True, default=new_id)

    type = Column(String, nullable=False)  # 'CALL', 'EMAIL', 'MEETING', 'NOTE'
    subject = Column(String)
    description = Column(Text)
    date_time = Column(TIMESTAMP, default=datetime.utcnow)

    lead_id = Column(String, ForeignKey("leads.id", ondelete="CASCADE"), index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"))

    lead = relationship("Lead", back_populates="activities")
