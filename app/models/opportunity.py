from datetime import datetime
from sqlalchemy import Column, String, Text, Float, Integer, TIMESTAMP, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id
from app.models.enums import OpportunityStage

class Opportunity(Base):
    __tablename__ = "opportunities"

    id = Column(String, primary_key=True, default=new_id)

    name = Column(String, nullable=False)
    description = Column(Text)
    stage = Column(
        Enum(OpportunityStage, name="opportunity_stage", native_enum=False, validate_strings=True),
        default=OpportunityStage.PROSPECTING,
        nullable=False,
    )
    amount = Column(Float)
    probability = Column(Integer, default=0)
    expected_close_date = Column(TIMESTAMP)

    account_id = Column(String, ForeignKey("crm_accounts.id", ondelete="SET NULL"))
    contact_id = Column(String, ForeignKey("contacts.id", ondelete="SET NULL"))
    assigned_to_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    account = relationship("CRMAccount", back_populates="opportunities")
    contact = relationship("Contact")
    assigned_to = relationship("User")
