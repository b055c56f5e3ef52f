from datetime import datetime
from sqlalchemy import Column, String, Text, TIMESTAMP
from app.core.database import Base, new_id
from app.models.enums import UserRole

class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=new_id)

    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String)

    name = Column(String)
    image = Column(Text)

    role = Column(String, default=UserRole.USER.value, nullable=False)

    # OAuth token used for calendar sync, stored per user
    calendar_access_token = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value
