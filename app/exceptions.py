from typing import List, Optional


class AppError(Exception):
    """Base for every error kind the services raise.

    Routes map an AppError straight to a response using ``status_code``
    and ``to_dict()``; the message is always safe to show to a caller.
    """

    code = "ERROR"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class NotFoundError(AppError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "Not found"


class EventNotFoundError(NotFoundError):
    default_message = "Event not found"


class RegistrationNotYetOpenError(AppError):
    code = "NOT_YET_OPEN"
    default_message = "Registration has not opened yet"


class RegistrationClosedError(AppError):
    code = "CLOSED"
    default_message = "Registration has closed"


class AlreadyRegisteredError(AppError):
    code = "ALREADY_REGISTERED"
    status_code = 409
    default_message = "You are already registered for this event"


class SoldOutError(AppError):
    code = "SOLD_OUT"
    status_code = 409
    default_message = "Event is sold out"


class InvalidInputError(AppError):
    code = "INVALID_INPUT"
    default_message = "Invalid input"

    def __init__(self, fields: List[str], message: Optional[str] = None):
        super().__init__(message)
        self.fields = fields

    def to_dict(self):
        data = super().to_dict()
        data["errors"] = self.fields
        return data


class ForbiddenError(AppError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Forbidden"


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Invalid credentials"


class StorageFailureError(AppError):
    code = "STORAGE_FAILURE"
    status_code = 500
    default_message = "Something went wrong, please try again"
