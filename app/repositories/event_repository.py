from typing import List, Optional

from sqlalchemy import or_, update

from app.extensions import db
from app.models import Event, Registration
from app.models.enums import EventStatus, EventType


class EventRepository:
    @staticmethod
    def get_event(event_id: str) -> Optional[Event]:
        return db.session.get(Event, event_id)

    @staticmethod
    def get_published_events(
        event_type: Optional[EventType] = None, is_paid: Optional[bool] = None
    ) -> List[Event]:
        query = Event.query.filter(Event.status == EventStatus.PUBLISHED)
        if event_type is not None:
            query = query.filter(Event.event_type == event_type)
        if is_paid is not None:
            query = query.filter(Event.is_paid == is_paid)
        return query.order_by(Event.event_starts.desc()).all()

    @staticmethod
    def get_events_by_organizer(organizer_id: str) -> List[Event]:
        return (
            Event.query.filter(Event.organizer_id == organizer_id)
            .order_by(Event.created_at.desc())
            .all()
        )

    @staticmethod
    def create_event(attrs) -> Event:
        event = Event(**attrs)
        db.session.add(event)
        db.session.commit()
        return event

    @staticmethod
    def update_event(event: Event, attrs: dict) -> Event:
        for key, value in attrs.items():
            if hasattr(event, key):
                setattr(event, key, value)
        db.session.commit()
        return event

    @staticmethod
    def delete_event(event_id: str) -> bool:
        """Delete an event and all of its registrations in one transaction."""
        try:
            Registration.query.filter_by(event_id=event_id).delete()
            deleted = Event.query.filter_by(id=event_id).delete()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return deleted == 1

    @staticmethod
    def apply_capacity(event_id: str, capacity: int) -> bool:
        """Set ``capacity`` only while it stays at or above ``registered_count``.

        Runs as one conditional UPDATE in the caller's transaction. Does not commit.
        """
        stmt = (
            update(Event)
            .where(Event.id == event_id)
            .where(Event.registered_count <= capacity)
            .values(capacity=capacity)
            .execution_options(synchronize_session=False)
        )
        result = db.session.execute(stmt)
        return result.rowcount == 1

    @staticmethod
    def increment_registered_count(event_id: str) -> bool:
        """Conditionally bump ``registered_count`` by one inside the caller's transaction.

        The capacity guard runs in the same UPDATE statement as the
        increment, so two concurrent callers can never both take the last
        seat. Returns False when the event is full (or gone). Does not commit.
        """
        stmt = (
            update(Event)
            .where(Event.id == event_id)
            .where(
                or_(
                    Event.capacity.is_(None),
                    Event.registered_count < Event.capacity,
                )
            )
            .values(registered_count=Event.registered_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = db.session.execute(stmt)
        return result.rowcount == 1
