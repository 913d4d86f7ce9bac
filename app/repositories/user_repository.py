from typing import Optional

from app.extensions import db
from app.models import User


class UserRepository:
    @staticmethod
    def sign_up(user):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def find_by_email(email) -> Optional[User]:
        return User.query.filter_by(email=email).first()

    @staticmethod
    def find_by_id(user_id: str) -> Optional[User]:
        return db.session.get(User, user_id)
