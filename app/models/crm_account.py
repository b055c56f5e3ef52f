from datetime import datetime
from sqlalchemy import Column, String, Text, Float, Integer, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id

class CRMAccount(Base):
    __tablename__ = "crm_accounts"

    id = Column(String, primary_key=True, default=new_id)

    name = Column(String, nullable=False)
    website = Column(String)
    industry = Column(String)
    description = Column(Text)
    phone = Column(String)
    annual_revenue = Column(Float)
    employees = Column(Integer)

    billing_street = Column(String)
    billing_city = Column(String)
    billing_state = Column(String)
    billing_zip_code = Column(String)
    billing_country = Column(String)

    shipping_street = Column(String)
    shipping_city = Column(String)
    shipping_state = Column(String)
    shipping_zip_code = Column(String)
    shipping_country = Column(String)

    latitude = Column(Float)
    longitude = Column(Float)

    owner_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    contacts = relationship("Contact", back_populates="account")
    opportunities = relationship("Opportunity", back_populates="account")
