import sys
import os

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)  # relative imports

from datetime import timedelta
from decimal import Decimal

from werkzeug.security import generate_password_hash

from app import create_app, db
from app.models import Event, User
from app.models.enums import EventStatus, EventType, UserRole
from app.utils.dates import utc_now

app = create_app()


def create_demo_users():
    """Create one club admin and a handful of students."""
    organizer = User.query.filter_by(email="organizer@campus.test").first()
    if not organizer:
        organizer = User(
            email="organizer@campus.test",
            first_name="Club",
            last_name="Admin",
            password_hash=generate_password_hash("organizer123"),
            role=UserRole.CLUB_ADMIN,
        )
        db.session.add(organizer)

    for i in range(5):
        email = f"student{i+1}@campus.test"
        if not User.query.filter_by(email=email).first():
            db.session.add(
                User(
                    email=email,
                    first_name=f"Student{i+1}",
                    last_name="Test",
                    password_hash=generate_password_hash("student123"),
                    role=UserRole.STUDENT,
                )
            )
    db.session.commit()
    app.logger.info("Demo users ready")
    return organizer


def create_demo_events(organizer):
    now = utc_now()
    events = [
        Event(
            organizer_id=organizer.id,
            title="Intro to Machine Learning",
            description="Hands-on workshop for beginners.",
            venue="Lab 3, CS Block",
            event_type=EventType.WORKSHOP,
            registration_opens=now - timedelta(days=1),
            registration_closes=now + timedelta(days=6),
            event_starts=now + timedelta(days=7),
            event_ends=now + timedelta(days=7, hours=3),
            capacity=40,
            status=EventStatus.PUBLISHED,
        ),
        Event(
            organizer_id=organizer.id,
            title="Spring Fest Concert",
            description="Live bands on the main lawn.",
            venue="Main Lawn",
            event_type=EventType.CONCERT,
            registration_opens=now - timedelta(days=2),
            registration_closes=now + timedelta(days=13),
            event_starts=now + timedelta(days=14),
            event_ends=now + timedelta(days=14, hours=5),
            is_paid=True,
            price=Decimal("199.00"),
            capacity=500,
            status=EventStatus.PUBLISHED,
        ),
        Event(
            organizer_id=organizer.id,
            title="Hackathon 2.0",
            description="24-hour build sprint. Details to follow.",
            venue="Auditorium",
            event_type=EventType.COMPETITION,
            registration_opens=now + timedelta(days=10),
            registration_closes=now + timedelta(days=20),
            event_starts=now + timedelta(days=21),
            event_ends=now + timedelta(days=22),
            status=EventStatus.DRAFT,
        ),
    ]
    db.session.add_all(events)
    db.session.commit()
    app.logger.info(f"Created {len(events)} demo events")


if __name__ == "__main__":
    with app.app_context():
        db.create_all()
        create_demo_events(create_demo_users())
