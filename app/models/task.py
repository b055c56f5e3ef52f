from datetime import datetime
from sqlalchemy import Column, String, Text, TIMESTAMP, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.core.database import Base, new_id
from app.models.enums import TaskStatus, TaskPriority

class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=new_id)

    title = Column(String, nullable=False)
    description = Column(Text)
    status = Column(
        Enum(TaskStatus, name="task_status", native_enum=False, validate_strings=True),
        default=TaskStatus.NOT_STARTED,
        nullable=False,
    )
    priority = Column(
        Enum(TaskPriority, name="task_priority", native_enum=False, validate_strings=True),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )
    due_date = Column(TIMESTAMP)

    assigned_to_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    contact_id = Column(String, ForeignKey("contacts.id", ondelete="SET NULL"))
    lead_id = Column(String, ForeignKey("leads.id", ondelete="CASCADE"))
    opportunity_id = Column(String, ForeignKey("opportunities.id", ondelete="SET NULL"))

    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    assigned_to = relationship("User")
    contact = relationship("Contact")
    lead = relationship("Lead", back_populates="tasks")
    opportunity = relationship("Opportunity")
