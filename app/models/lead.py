from datetime import datetime
from sqlalchemy import Column, String, Text, Float, Numeric, TIMESTAMP, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id
from app.models.enums import LeadStatus

class Lead(Base):
    __tablename__ = "leads"

    id = Column(String, primary_key=True, default=new_id)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)

    email = Column(String)
    phone = Column(String)
    mobile = Column(String)
    company = Column(String)
    job_title = Column(String)
    website = Column(String)

    source = Column(String)
    estimated_value = Column(Numeric(12, 2, asdecimal=False))
    description = Column(Text)
    photo_url = Column(Text)  # base64 data URL or remote URL

    status = Column(
        Enum(LeadStatus, name="lead_status", native_enum=False, validate_strings=True),
        default=LeadStatus.NEW,
        nullable=False,
        index=True,
    )

    # Address + geo
    street = Column(String)
    city = Column(String)
    state = Column(String)
    zip_code = Column(String, index=True)
    country = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)

    # Ownership
    assigned_to_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    # Admin who handed the lead off; set once, never overwritten
    assigned_admin_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    territory_id = Column(String, ForeignKey("territories.id", ondelete="SET NULL"))

    last_activity_at = Column(TIMESTAMP)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    assigned_to = relationship("User", foreign_keys=[assigned_to_id])
    assigned_admin = relationship("User", foreign_keys=[assigned_admin_id])
    territory = relationship("Territory")

    activities = relationship("Activity", back_populates="lead", passive_deletes=True)
    tasks = relationship("Task", back_populates="lead", passive_deletes=True)
    door_activities = relationship("DoorActivity", back_populates="lead", passive_deletes=True)
