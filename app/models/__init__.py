from app.models.club import Club
from app.models.event import Event
from app.models.registration import Registration
from app.models.user import User
from app.models.enums import EventStatus, EventType, PaymentStatus, UserRole
