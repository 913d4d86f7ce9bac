from app.models import User
from app.models.enums import UserRole
from app.exceptions import InvalidInputError, NotFoundError, UnauthorizedError
from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token
from app.repositories import UserRepository
from app.extensions import db
from sqlalchemy.exc import IntegrityError
import logging

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id), additional_claims={"role": user.role.value}
        )

    @staticmethod
    def sign_up(user_data):
        email = (user_data.get("email") or "").strip().lower()
        password = user_data.get("password") or ""
        missing = [f for f, v in (("email", email), ("password", password)) if not v]
        if missing:
            raise InvalidInputError(missing, "Email and password required")

        # Check if user exists
        if UserRepository.find_by_email(email):
            logger.warning(f"Signup attempt with existing email: {email}")
            raise InvalidInputError(["email"], "Email already in use")

        user = User(
            email=email,
            first_name=user_data.get("first_name"),
            last_name=user_data.get("last_name"),
            password_hash=generate_password_hash(password),
            role=UserRole.STUDENT,
        )
        try:
            created_user = UserRepository.sign_up(user)
        except IntegrityError:
            db.session.rollback()
            logger.warning(f"Concurrent signup lost the race for email: {email}")
            raise InvalidInputError(["email"], "Email already in use")

        logger.info(f"User created successfully: {created_user.email}")
        return {"token": UserService.issue_token(created_user), "user": created_user.to_dict()}

    @staticmethod
    def sign_in(email, password):
        user = UserRepository.find_by_email((email or "").strip().lower())
        if not user or not user.password_hash:
            logger.warning(f"Login attempt with unknown email: {email}")
            raise UnauthorizedError()

        if not check_password_hash(user.password_hash, password or ""):
            logger.warning(f"Failed login attempt for user: {email}")
            raise UnauthorizedError()

        logger.info(f"User logged in successfully: {email}")
        return {"token": UserService.issue_token(user), "user": user.to_dict()}

    @staticmethod
    def get_user(user_id: str) -> User:
        user = UserRepository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
