from typing import List, Optional

from sqlalchemy.orm import joinedload

from app.extensions import db
from app.models import Event, Registration


class RegistrationRepository:
    @staticmethod
    def find_by_event_and_user(event_id: str, user_id: str) -> Optional[Registration]:
        """Find a registration by event_id and user_id"""
        return Registration.query.filter_by(event_id=event_id, user_id=user_id).first()

    @staticmethod
    def find_by_ticket_id(ticket_id: str) -> Optional[Registration]:
        return Registration.query.filter_by(ticket_id=ticket_id).first()

    @staticmethod
    def add(attrs) -> Registration:
        """Stage a registration in the current transaction without committing."""
        registration = Registration(**attrs)
        db.session.add(registration)
        db.session.flush()
        return registration

    @staticmethod
    def get_for_event(event_id: str) -> List[Registration]:
        return (
            Registration.query.filter_by(event_id=event_id)
            .order_by(Registration.registered_at.desc())
            .all()
        )

    @staticmethod
    def get_for_user(user_id: str) -> List[Registration]:
        """Registrations of a user with their events loaded, newest first."""
        return (
            Registration.query.options(joinedload(Registration.event))
            .filter(Registration.user_id == user_id)
            .order_by(Registration.registered_at.desc())
            .all()
        )

    @staticmethod
    def get_recent_for_organizer(organizer_id: str, limit: int = 10) -> List[Registration]:
        return (
            Registration.query.join(Event, Registration.event_id == Event.id)
            .options(joinedload(Registration.event))
            .filter(Event.organizer_id == organizer_id)
            .order_by(Registration.registered_at.desc())
            .limit(limit)
            .all()
        )
