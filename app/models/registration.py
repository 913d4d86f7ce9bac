import uuid

from app.extensions import db
from app.utils.dates import isoformat, utc_now
from .enums import PaymentStatus, enum_values


class Registration(db.Model):
    __tablename__ = "registrations"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = db.Column(
        db.String(36), db.ForeignKey("events.id", ondelete="CASCADE"), nullable=False
    )
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)
    ticket_id = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(200), nullable=False)
    phone = db.Column(db.String(15), nullable=False)
    branch = db.Column(db.String(50), nullable=False)
    year = db.Column(db.String(10), nullable=False)
    payment_status = db.Column(
        db.Enum(PaymentStatus, name="payment_status", values_callable=enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    payment_id = db.Column(db.String(100), nullable=True)
    registered_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, default=utc_now)

    event = db.relationship("Event", back_populates="registrations")
    user = db.relationship("User", backref=db.backref("registrations", lazy="dynamic"))

    # A user can only hold one registration per event
    __table_args__ = (
        db.UniqueConstraint("event_id", "user_id", name="uq_registration_event_user"),
        db.Index("idx_regs_event", "event_id"),
        db.Index("idx_regs_user", "user_id"),
    )

    def to_dict(self, include_event=False):
        data = {
            "id": self.id,
            "event_id": self.event_id,
            "user_id": self.user_id,
            "ticket_id": self.ticket_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "branch": self.branch,
            "year": self.year,
            "payment_status": self.payment_status.value if self.payment_status else None,
            "registered_at": isoformat(self.registered_at),
        }
        if include_event:
            data["event"] = self.event.to_dict() if self.event else None
        return data

    def __repr__(self):
        return (
            f"Registration("
            f"id={self.id}, "
            f"event_id={self.event_id}, "
            f"user_id={self.user_id}, "
            f"ticket_id={self.ticket_id}, "
            f"payment_status={self.payment_status}"
            f")"
        )
