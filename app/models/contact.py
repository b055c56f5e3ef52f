from datetime import datetime
from sqlalchemy import Column, String, Text, Float, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id

class Contact(Base):
    __tablename__ = "contacts"

    id = Column(String, primary_key=True, default=new_id)

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String)
    phone = Column(String)
    mobile = Column(String)
    job_title = Column(String)
    department = Column(String)
    description = Column(Text)

    street = Column(String)
    city = Column(String)
    state = Column(String)
    zip_code = Column(String)
    country = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)

    account_id = Column(String, ForeignKey("crm_accounts.id", ondelete="SET NULL"))
    owner_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    account = relationship("CRMAccount", back_populates="contacts")
