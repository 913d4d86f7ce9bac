"""Pytest configuration and shared fixtures."""

from datetime import timedelta
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from app.extensions import db
from app.models import Event, Registration, User
from app.models.enums import EventStatus, EventType, PaymentStatus, UserRole
from app.services.user_service import UserService
from app.utils.dates import utc_now

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "RATELIMIT_ENABLED": False,
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(email, role=UserRole.STUDENT):
    user = User(
        email=email,
        first_name=email.split("@")[0],
        password_hash=generate_password_hash("password123"),
        role=role,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def organizer(app):
    return _make_user("organizer@campus.test", UserRole.CLUB_ADMIN)


@pytest.fixture
def other_organizer(app):
    return _make_user("other-organizer@campus.test", UserRole.CLUB_ADMIN)


@pytest.fixture
def student(app):
    return _make_user("student@campus.test")


@pytest.fixture
def make_user(app):
    return _make_user


@pytest.fixture
def make_event(organizer):
    """Factory for events whose registration window is open right now."""

    def _make_event(**overrides):
        now = utc_now()
        attrs = {
            "organizer_id": organizer.id,
            "title": "Robotics Workshop",
            "description": "Build a line follower in an afternoon.",
            "venue": "Lab 2",
            "event_type": EventType.WORKSHOP,
            "registration_opens": now - timedelta(days=1),
            "registration_closes": now + timedelta(days=1),
            "event_starts": now + timedelta(days=2),
            "event_ends": now + timedelta(days=2, hours=3),
            "is_paid": False,
            "price": Decimal("0"),
            "capacity": None,
            "status": EventStatus.PUBLISHED,
        }
        attrs.update(overrides)
        event = Event(**attrs)
        db.session.add(event)
        db.session.commit()
        return event

    return _make_event


@pytest.fixture
def add_registration():
    """Insert a registration row and bump the count, bypassing the service."""

    def _add_registration(event, user, ticket_id=None):
        registration = Registration(
            event_id=event.id,
            user_id=user.id,
            ticket_id=ticket_id or f"TICKET-{user.id[:8].upper()}",
            name="Test Student",
            email=user.email,
            phone="9876543210",
            branch="CSE",
            year="3",
            payment_status=PaymentStatus.COMPLETED,
        )
        db.session.add(registration)
        event.registered_count = event.registered_count + 1
        db.session.commit()
        return registration

    return _add_registration


@pytest.fixture
def contact_fields():
    return {
        "name": "Asha Rao",
        "email": "asha@campus.test",
        "phone": "9876543210",
        "branch": "CSE",
        "year": "3",
    }


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {UserService.issue_token(user)}"}

    return _auth_headers
