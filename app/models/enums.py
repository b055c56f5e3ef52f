import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


class LeadStatus(str, enum.Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    QUALIFIED = "QUALIFIED"
    UNQUALIFIED = "UNQUALIFIED"
    CONVERTED = "CONVERTED"
    DEAD = "DEAD"


class DoorOutcome(str, enum.Enum):
    NO_ANSWER = "NO_ANSWER"
    LEFT_MATERIALS = "LEFT_MATERIALS"
    SPOKE_WITH_RESIDENT = "SPOKE_WITH_RESIDENT"
    NOT_INTERESTED = "NOT_INTERESTED"
    INTERESTED = "INTERESTED"
    APPOINTMENT_SET = "APPOINTMENT_SET"
    WRONG_ADDRESS = "WRONG_ADDRESS"
    DO_NOT_CONTACT = "DO_NOT_CONTACT"


class OpportunityStage(str, enum.Enum):
    PROSPECTING = "PROSPECTING"
    QUALIFICATION = "QUALIFICATION"
    PROPOSAL = "PROPOSAL"
    NEGOTIATION = "NEGOTIATION"
    CLOSED_WON = "CLOSED_WON"
    CLOSED_LOST = "CLOSED_LOST"


class TaskStatus(str, enum.Enum):
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    DEFERRED = "DEFERRED"


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class CalendarProvider(str, enum.Enum):
    LOCAL = "LOCAL"
    GOOGLE = "GOOGLE"
