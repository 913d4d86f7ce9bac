from decimal import Decimal, InvalidOperation
from typing import List, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from app.exceptions import (
    EventNotFoundError,
    ForbiddenError,
    InvalidInputError,
    StorageFailureError,
)
from app.models import Event
from app.models.enums import EventStatus, EventType
from app.repositories.event_repository import EventRepository
from app.utils.dates import as_utc, parse_datetime

REQUIRED_FIELDS = [
    "title",
    "description",
    "venue",
    "registration_opens",
    "registration_closes",
    "event_starts",
    "event_ends",
]

TIMESTAMP_FIELDS = [
    "registration_opens",
    "registration_closes",
    "event_starts",
    "event_ends",
]

# Fields callers may never set directly
PROTECTED_FIELDS = {"id", "organizer_id", "registered_count", "created_at", "updated_at"}


def _parse_event_fields(data: dict, partial: bool = False):
    """Turn request data into model attributes.

    Returns ``(attrs, errors)``; ``errors`` lists the offending field names.
    With ``partial`` only the fields present in ``data`` are checked.
    """
    attrs = {}
    errors = []

    if not partial:
        errors.extend(f for f in REQUIRED_FIELDS if data.get(f) in (None, ""))

    def present(field):
        return field in data and field not in errors

    if present("title"):
        title = data["title"]
        if not isinstance(title, str) or not 1 <= len(title.strip()) <= 100:
            errors.append("title")
        else:
            attrs["title"] = title.strip()

    if present("description"):
        description = data["description"]
        if not isinstance(description, str) or not description.strip():
            errors.append("description")
        else:
            attrs["description"] = description

    if present("venue"):
        venue = data["venue"]
        if not isinstance(venue, str) or not 1 <= len(venue.strip()) <= 200:
            errors.append("venue")
        else:
            attrs["venue"] = venue.strip()

    if present("banner_url"):
        banner_url = data["banner_url"]
        if banner_url is not None and (not isinstance(banner_url, str) or len(banner_url) > 500):
            errors.append("banner_url")
        else:
            attrs["banner_url"] = banner_url

    for field in TIMESTAMP_FIELDS:
        if present(field):
            try:
                attrs[field] = parse_datetime(data[field])
            except ValueError:
                errors.append(field)

    if present("event_type"):
        try:
            attrs["event_type"] = EventType(data["event_type"])
        except ValueError:
            errors.append("event_type")

    if present("status"):
        try:
            attrs["status"] = EventStatus(data["status"])
        except ValueError:
            errors.append("status")

    if present("is_paid"):
        if not isinstance(data["is_paid"], bool):
            errors.append("is_paid")
        else:
            attrs["is_paid"] = data["is_paid"]

    if present("price"):
        try:
            price = Decimal(str(data["price"] if data["price"] is not None else 0))
            if price < 0 or not price.is_finite():
                raise InvalidOperation()
            attrs["price"] = price.quantize(Decimal("0.01"))
        except InvalidOperation:
            errors.append("price")

    if present("capacity"):
        capacity = data["capacity"]
        if capacity is None:
            attrs["capacity"] = None
        elif isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            errors.append("capacity")
        else:
            attrs["capacity"] = capacity

    if present("club_id"):
        attrs["club_id"] = data["club_id"]

    return attrs, errors


def _check_schedule(opens, closes, starts, ends) -> List[str]:
    """registration_opens <= registration_closes <= event_starts < event_ends"""
    opens, closes, starts, ends = (as_utc(v) for v in (opens, closes, starts, ends))
    errors = []
    if opens > closes:
        errors.append("registration_closes")
    if closes > starts:
        errors.append("event_starts")
    if starts >= ends:
        errors.append("event_ends")
    return errors


class EventService:
    @staticmethod
    def get_event(event_id: str) -> Event:
        event = EventRepository.get_event(event_id)
        if not event:
            raise EventNotFoundError()
        return event

    @staticmethod
    def get_published_events(filters: Optional[dict] = None) -> List[Event]:
        filters = filters or {}
        errors = []
        event_type = None
        if filters.get("event_type"):
            try:
                event_type = EventType(filters["event_type"])
            except ValueError:
                errors.append("event_type")

        is_paid = filters.get("is_paid")
        if isinstance(is_paid, str):
            lowered = is_paid.lower()
            if lowered in ("true", "1", "t"):
                is_paid = True
            elif lowered in ("false", "0", "f"):
                is_paid = False
            else:
                errors.append("is_paid")

        if errors:
            raise InvalidInputError(errors, "Invalid event filters")
        return EventRepository.get_published_events(event_type=event_type, is_paid=is_paid)

    @staticmethod
    def get_events_for_organizer(organizer_id: str) -> List[Event]:
        return EventRepository.get_events_by_organizer(organizer_id)

    @staticmethod
    def get_owned_event(event_id: str, organizer_id: str) -> Event:
        event = EventService.get_event(event_id)
        if event.organizer_id != organizer_id:
            raise ForbiddenError("You don't have permission to manage this event")
        return event

    @staticmethod
    def create_event(data: dict, organizer_id: str) -> Event:
        if not isinstance(data, dict):
            raise InvalidInputError([], "Invalid request body")
        if not data:
            raise InvalidInputError([], "No data provided")

        attrs, errors = _parse_event_fields(data)
        if not errors:
            errors = _check_schedule(
                attrs["registration_opens"],
                attrs["registration_closes"],
                attrs["event_starts"],
                attrs["event_ends"],
            )
        if errors:
            current_app.logger.info(f"Rejected event creation by {organizer_id}: {errors}")
            raise InvalidInputError(errors, "Invalid event data")

        attrs["organizer_id"] = organizer_id
        try:
            event = EventRepository.create_event(attrs)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Failed to create event for {organizer_id}: {str(e)}")
            db.session.rollback()
            raise StorageFailureError()

        current_app.logger.info(f"Event {event.id} created by organizer {organizer_id}")
        return event

    @staticmethod
    def update_event(event_id: str, data: dict, organizer_id: str) -> Event:
        event = EventService.get_owned_event(event_id, organizer_id)
        if not isinstance(data, dict):
            raise InvalidInputError([], "Invalid request body")
        if not data:
            raise InvalidInputError([], "No data provided")

        data = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
        attrs, errors = _parse_event_fields(data, partial=True)
        if not errors:
            merged = {f: attrs.get(f, getattr(event, f)) for f in TIMESTAMP_FIELDS}
            errors = _check_schedule(
                merged["registration_opens"],
                merged["registration_closes"],
                merged["event_starts"],
                merged["event_ends"],
            )
        capacity = attrs.get("capacity", event.capacity)
        if capacity is not None and capacity < event.registered_count:
            errors.append("capacity")
        if errors:
            raise InvalidInputError(errors, "Invalid event data")

        try:
            new_capacity = attrs.get("capacity")
            if new_capacity is not None and not EventRepository.apply_capacity(event_id, new_capacity):
                db.session.rollback()
                current_app.logger.info(
                    f"Rejected capacity {new_capacity} for event {event_id}: below registered count"
                )
                raise InvalidInputError(["capacity"], "Invalid event data")
            event = EventRepository.update_event(event, attrs)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Failed to update event {event_id}: {str(e)}")
            db.session.rollback()
            raise StorageFailureError()

        current_app.logger.info(f"Event {event_id} updated: {sorted(attrs)}")
        return event

    @staticmethod
    def delete_event(event_id: str, organizer_id: str) -> bool:
        """Delete an owned event with its registrations.

        A second delete of the same id raises EventNotFoundError.
        """
        EventService.get_owned_event(event_id, organizer_id)
        try:
            deleted = EventRepository.delete_event(event_id)
        except SQLAlchemyError as e:
            current_app.logger.error(f"Failed to delete event {event_id}: {str(e)}")
            raise StorageFailureError()

        if not deleted:
            raise EventNotFoundError()
        current_app.logger.info(f"Event {event_id} deleted by organizer {organizer_id}")
        return True
