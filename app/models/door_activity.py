from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, Float, TIMESTAMP, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id
from app.models.enums import DoorOutcome

class DoorActivity(Base):
    """One canvassing visit. Rows are append-only."""
    __tablename__ = "door_activities"

    id = Column(String, primary_key=True, default=new_id)

    outcome = Column(
        Enum(DoorOutcome, name="door_outcome", native_enum=False, validate_strings=True),
        nullable=False,
    )
    notes = Column(Text)

    left_materials = Column(Boolean, default=False, nullable=False)
    materials_type = Column(String)

    # Where the rep actually stood, not the lead's stored coordinates
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    photo_url = Column(Text)

    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    lead_id = Column(String, ForeignKey("leads.id", ondelete="SET NULL"), index=True)
    contact_id = Column(String, ForeignKey("contacts.id", ondelete="SET NULL"))

    created_at = Column(TIMESTAMP, default=datetime.utcnow, index=True)

    # Relationships
    user = relationship("User")
    lead = relationship("Lead", back_populates="door_activities")
    contact = relationship("Contact")
