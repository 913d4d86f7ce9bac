"""Registration accept/reject rules and the capacity-safe commit.

The capacity read done before validation is only a fast path. The
authoritative gate is ``EventRepository.increment_registered_count``, a
single conditional UPDATE executed in the same transaction as the
registration INSERT: either both are committed or neither is.
"""

import logging
import re
import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.exceptions import (
    AlreadyRegisteredError,
    EventNotFoundError,
    InvalidInputError,
    NotFoundError,
    RegistrationClosedError,
    RegistrationNotYetOpenError,
    SoldOutError,
    StorageFailureError,
)
from app.extensions import db
from app.models import Registration
from app.models.enums import PaymentStatus
from app.repositories.event_repository import EventRepository
from app.repositories.registration_repository import RegistrationRepository
from app.services.event_service import EventService
from app.utils.dates import as_utc, utc_now

logger = logging.getLogger(__name__)

TICKET_PREFIX = "TICKET-"
MAX_TICKET_ATTEMPTS = 5

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# field -> (min length, max length)
CONTACT_FIELDS = {
    "name": (1, 100),
    "email": (3, 200),
    "phone": (10, 15),
    "branch": (1, 50),
    "year": (1, 10),
}


def generate_ticket_id() -> str:
    return f"{TICKET_PREFIX}{uuid.uuid4().hex[:8].upper()}"


def validate_contact_fields(data: Optional[dict]):
    """Returns ``(cleaned, errors)`` for the registrant's contact details."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidInputError([], "Invalid request body")
    cleaned = {}
    errors = []
    for field, (min_len, max_len) in CONTACT_FIELDS.items():
        value = data.get(field)
        if not isinstance(value, str):
            errors.append(field)
            continue
        value = value.strip()
        if not min_len <= len(value) <= max_len:
            errors.append(field)
            continue
        cleaned[field] = value

    if "email" in cleaned and not EMAIL_PATTERN.match(cleaned["email"]):
        errors.append("email")
        del cleaned["email"]
    return cleaned, errors


class RegistrationService:
    @staticmethod
    def register_for_event(
        event_id: str, user_id: str, contact_fields: dict, now: Optional[datetime] = None
    ) -> Registration:
        now = now or utc_now()
        logger.info(f"Registration attempt: user {user_id} for event {event_id}")

        event = EventRepository.get_event(event_id)
        if not event:
            raise EventNotFoundError()

        if now < as_utc(event.registration_opens):
            logger.info(f"User {user_id} blocked from event {event_id}: registration not open")
            raise RegistrationNotYetOpenError()
        if now > as_utc(event.registration_closes):
            logger.info(f"User {user_id} blocked from event {event_id}: registration closed")
            raise RegistrationClosedError()

        if RegistrationRepository.find_by_event_and_user(event_id, user_id):
            logger.warning(f"User {user_id} already registered for event {event_id}")
            raise AlreadyRegisteredError()

        if event.is_full:
            logger.info(
                f"User {user_id} blocked from event {event_id}: full "
                f"({event.registered_count}/{event.capacity})"
            )
            raise SoldOutError()

        cleaned, errors = validate_contact_fields(contact_fields)
        if errors:
            raise InvalidInputError(errors, "Invalid registration data")

        payment_status = PaymentStatus.PENDING if event.is_paid else PaymentStatus.COMPLETED

        for attempt in range(1, MAX_TICKET_ATTEMPTS + 1):
            ticket_id = generate_ticket_id()
            try:
                registration = RegistrationRepository.add(
                    {
                        **cleaned,
                        "event_id": event_id,
                        "user_id": user_id,
                        "ticket_id": ticket_id,
                        "payment_status": payment_status,
                    }
                )
                if not EventRepository.increment_registered_count(event_id):
                    db.session.rollback()
                    logger.warning(
                        f"Capacity reached for event {event_id} while committing user {user_id}; "
                        f"registration rolled back"
                    )
                    raise SoldOutError()
                db.session.commit()
            except IntegrityError as e:
                db.session.rollback()
                if RegistrationRepository.find_by_event_and_user(event_id, user_id):
                    logger.warning(f"Concurrent duplicate registration for user {user_id}, event {event_id}")
                    raise AlreadyRegisteredError()
                if RegistrationRepository.find_by_ticket_id(ticket_id):
                    logger.warning(f"Ticket id collision on {ticket_id} (attempt {attempt}), retrying")
                    continue
                if not EventRepository.get_event(event_id):
                    raise EventNotFoundError()
                logger.error(f"Integrity error registering user {user_id} for event {event_id}: {str(e)}")
                raise StorageFailureError()
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Failed to register user {user_id} for event {event_id}: {str(e)}")
                raise StorageFailureError()

            logger.info(
                f"Registered user {user_id} for event {event_id} with ticket {ticket_id} "
                f"(payment {payment_status.value})"
            )
            return registration

        logger.error(f"Gave up generating a unique ticket id for user {user_id}, event {event_id}")
        raise StorageFailureError()

    @staticmethod
    def get_user_registration(event_id: str, user_id: str) -> Optional[Registration]:
        return RegistrationRepository.find_by_event_and_user(event_id, user_id)

    @staticmethod
    def get_user_tickets(user_id: str) -> List[Registration]:
        return RegistrationRepository.get_for_user(user_id)

    @staticmethod
    def get_ticket(ticket_id: str, user_id: str) -> Registration:
        registration = RegistrationRepository.find_by_ticket_id(ticket_id)
        if not registration or registration.user_id != user_id:
            raise NotFoundError("Ticket not found")
        return registration

    @staticmethod
    def get_event_registrations(event_id: str, organizer_id: str) -> List[Registration]:
        """Registrations for an event, visible to its organizer only."""
        EventService.get_owned_event(event_id, organizer_id)
        return RegistrationRepository.get_for_event(event_id)
