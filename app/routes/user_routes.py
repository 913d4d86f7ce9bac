from flask import Blueprint, current_app, jsonify, request, send_file
from flask_jwt_extended import jwt_required
import io

from app.exceptions import AppError
from app.extensions import limiter
from app.services import RegistrationService, UserService
from app.utils.auth import current_auth
from app.utils.qr import ticket_qr_png

user_bp = Blueprint("user", __name__)

auth_limit = limiter.shared_limit(
    lambda: current_app.config.get("AUTH_RATE_LIMIT", "5 per hour"), scope="auth"
)


@user_bp.route("/auth/signup", methods=["POST"])
@auth_limit
def sign_up():
    try:
        user_data = request.get_json(silent=True)
        if not isinstance(user_data, dict) or not user_data:
            return jsonify({"error": "No data provided"}), 400

        result = UserService.sign_up(user_data)
        return jsonify(result), 201
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Signup error: {str(e)}")
        return jsonify({"error": "Failed to sign up"}), 500


@user_bp.route("/auth/login", methods=["POST"])
@auth_limit
def sign_in():
    try:
        user_data = request.get_json(silent=True)
        if not isinstance(user_data, dict) or not user_data:
            return jsonify({"error": "No data provided"}), 400

        missing_fields = [f for f in ("email", "password") if not user_data.get(f)]
        if missing_fields:
            return (
                jsonify(
                    {
                        "error": "Email and password required",
                        "missing_fields": missing_fields,
                    }
                ),
                400,
            )

        result = UserService.sign_in(user_data["email"], user_data["password"])
        return jsonify(result), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Login error: {str(e)}")
        return jsonify({"error": "Failed to log in"}), 500


@user_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    try:
        user = UserService.get_user(current_auth().user_id)
        return jsonify(user.to_dict()), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code


@user_bp.route("/users/tickets", methods=["GET"])
@jwt_required()
def get_tickets():
    try:
        tickets = RegistrationService.get_user_tickets(current_auth().user_id)
        return jsonify([t.to_dict(include_event=True) for t in tickets]), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching tickets: {str(e)}")
        return jsonify({"error": "Failed to fetch tickets"}), 500


@user_bp.route("/users/tickets/<ticket_id>/qr", methods=["GET"])
@jwt_required()
def get_ticket_qr(ticket_id):
    try:
        registration = RegistrationService.get_ticket(ticket_id, current_auth().user_id)
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code

    return send_file(
        io.BytesIO(ticket_qr_png(registration.ticket_id)),
        mimetype="image/png",
        download_name=f"{registration.ticket_id}.png",
    )
