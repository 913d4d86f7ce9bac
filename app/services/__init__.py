from app.services.admin_service import AdminService
from app.services.event_service import EventService
from app.services.registration_service import RegistrationService
from app.services.user_service import UserService
