from sqlalchemy import Column, String, Text
from app.core.database import Base, new_id

class Territory(Base):
    __tablename__ = "territories"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text)
