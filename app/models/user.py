import uuid

from app.extensions import db
from .enums import UserRole, enum_values


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False)
    first_name = db.Column(db.String(50), nullable=True)
    last_name = db.Column(db.String(50), nullable=True)
    password_hash = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(15), nullable=True)
    branch = db.Column(db.String(50), nullable=True)
    year = db.Column(db.String(10), nullable=True)
    role = db.Column(
        db.Enum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.STUDENT,
    )
    club_id = db.Column(db.String(36), db.ForeignKey("clubs.id"), nullable=True)
    created_at = db.Column(
        db.TIMESTAMP(timezone=True), nullable=False, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "branch": self.branch,
            "year": self.year,
            "role": self.role.value if self.role else None,
            "club_id": self.club_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"User(id={self.id}, email='{self.email}', role={self.role})"
