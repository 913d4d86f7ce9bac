from enum import Enum


class EventStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class EventType(Enum):
    WORKSHOP = "workshop"
    CONCERT = "concert"
    COMPETITION = "competition"
    SEMINAR = "seminar"
    SPORTS = "sports"
    CULTURAL = "cultural"
    OTHER = "other"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class UserRole(Enum):
    STUDENT = "student"
    CLUB_ADMIN = "club_admin"
    SUPER_ADMIN = "super_admin"


ADMIN_ROLES = (UserRole.CLUB_ADMIN, UserRole.SUPER_ADMIN)


def enum_values(enum_cls):
    """Persist enum values ("published") rather than member names ("PUBLISHED")."""
    return [member.value for member in enum_cls]
