import logging
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import ValidationError, NotFoundError
from app.core.security import get_password_hash
from app.models.enums import UserRole
from app.models.lead import Lead
from app.models.user import User

logger = logging.getLogger(__name__)

ROLES = {r.value for r in UserRole}


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str):
        return self.db.query(User).filter(func.lower(User.email) == email.lower()).first()

    def register(self, email: str, password: str, name: str) -> User:
        if self.get_by_email(email):
            raise ValidationError("Email already registered")

        # Self-registration never grants admin; see assign_role
        user = User(
            email=email,
            password_hash=get_password_hash(password),
            name=name,
            role=UserRole.USER.value,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def assign_role(self, email: str, role: str) -> User:
        """Role bootstrap step used by scripts/seed_roles.py."""
        if role not in ROLES:
            raise ValidationError(f"Unknown role '{role}'")

        user = self.get_by_email(email)
        if not user:
            raise NotFoundError(f"No user with email {email}")

        user.role = role
        self.db.commit()
        logger.info(f"Role '{role}' assigned to {email}")
        return user

    def list_with_lead_counts(self):
        owned = dict(
            self.db.query(Lead.assigned_to_id, func.count(Lead.id))
            .group_by(Lead.assigned_to_id).all()
        )
        administered = dict(
            self.db.query(Lead.assigned_admin_id, func.count(Lead.id))
            .group_by(Lead.assigned_admin_id).all()
        )

        users = self.db.query(User).order_by(User.name).all()
        return [
            {
                "id": u.id,
                "email": u.email,
                "name": u.name,
                "image": u.image,
                "role": u.role,
                "lead_count": owned.get(u.id, 0),
                "administered_lead_count": administered.get(u.id, 0),
            }
            for u in users
        ]
