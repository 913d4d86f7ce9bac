from dataclasses import dataclass
from functools import wraps

from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from app.models.enums import ADMIN_ROLES, UserRole


@dataclass(frozen=True)
class AuthContext:
    """The verified caller of one request, handed explicitly to services."""

    user_id: str
    role: UserRole

    @property
    def is_admin(self):
        return self.role in ADMIN_ROLES


def current_auth() -> AuthContext:
    """Build the AuthContext from the already-verified JWT of this request."""
    claims = get_jwt()
    try:
        role = UserRole(claims.get("role"))
    except ValueError:
        role = UserRole.STUDENT
    return AuthContext(user_id=get_jwt_identity(), role=role)


def admin_required(fn):
    """Allow club admins and super admins only."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        if not current_auth().is_admin:
            return jsonify({"error": "Forbidden - Admin access required", "code": "FORBIDDEN"}), 403
        return fn(*args, **kwargs)

    return wrapper
