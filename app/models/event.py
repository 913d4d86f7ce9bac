import uuid

from app.extensions import db
from app.utils.dates import isoformat
from .enums import EventStatus, EventType, enum_values


class Event(db.Model):
    __tablename__ = "events"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    club_id = db.Column(db.String(36), db.ForeignKey("clubs.id"), nullable=True)
    organizer_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    banner_url = db.Column(db.String(500), nullable=True)
    venue = db.Column(db.String(200), nullable=False)
    event_type = db.Column(
        db.Enum(EventType, name="event_type", values_callable=enum_values),
        nullable=False,
        default=EventType.OTHER,
    )
    registration_opens = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    registration_closes = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    event_starts = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    event_ends = db.Column(db.TIMESTAMP(timezone=True), nullable=False)
    is_paid = db.Column(db.Boolean, nullable=False, default=False)
    price = db.Column(db.DECIMAL(10, 2), nullable=False, default=0)
    capacity = db.Column(db.Integer, nullable=True)
    registered_count = db.Column(db.Integer, nullable=False, default=0)
    status = db.Column(
        db.Enum(EventStatus, name="event_status", values_callable=enum_values),
        nullable=False,
        default=EventStatus.DRAFT,
    )
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    registrations = db.relationship(
        "Registration",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        db.Index("idx_events_organizer", "organizer_id"),
        db.Index("idx_events_status_starts", "status", "event_starts"),
        db.CheckConstraint("registered_count >= 0", name="ck_events_registered_count"),
    )

    @property
    def is_full(self):
        return self.capacity is not None and self.registered_count >= self.capacity

    def to_dict(self):
        return {
            "id": self.id,
            "club_id": self.club_id,
            "organizer_id": self.organizer_id,
            "title": self.title,
            "description": self.description,
            "banner_url": self.banner_url,
            "venue": self.venue,
            "event_type": self.event_type.value if self.event_type else None,
            "registration_opens": isoformat(self.registration_opens),
            "registration_closes": isoformat(self.registration_closes),
            "event_starts": isoformat(self.event_starts),
            "event_ends": isoformat(self.event_ends),
            "is_paid": self.is_paid,
            "price": f"{self.price:.2f}" if self.price is not None else None,
            "capacity": self.capacity,
            "registered_count": self.registered_count,
            "status": self.status.value if self.status else None,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }

    def __repr__(self):
        return (
            f"Event("
            f"id={self.id}, "
            f"title='{self.title}', "
            f"status={self.status}, "
            f"capacity={self.capacity}, "
            f"registered_count={self.registered_count}"
            f")"
        )
