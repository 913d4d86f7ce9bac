from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from app.exceptions import AppError
from app.services import EventService, RegistrationService
from app.utils.auth import admin_required, current_auth

event_bp = Blueprint("event", __name__)


@event_bp.route("/events", methods=["GET"])
def get_published_events():
    try:
        filters = {
            "event_type": request.args.get("event_type"),
            "is_paid": request.args.get("is_paid"),
        }
        events = EventService.get_published_events(filters)
        return jsonify([event.to_dict() for event in events]), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error fetching events: {str(e)}")
        return jsonify({"error": "Failed to fetch events"}), 500


@event_bp.route("/events/<event_id>", methods=["GET"])
def get_event(event_id):
    try:
        event = EventService.get_event(event_id)
        return jsonify(event.to_dict()), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error fetching event {event_id}: {str(e)}")
        return jsonify({"error": "Failed to fetch event"}), 500


@event_bp.route("/events/<event_id>/my-registration", methods=["GET"])
@jwt_required()
def get_my_registration(event_id):
    try:
        registration = RegistrationService.get_user_registration(
            event_id, current_auth().user_id
        )
        return jsonify(registration.to_dict() if registration else None), 200
    except Exception as e:
        current_app.logger.error(f"Error checking registration: {str(e)}")
        return jsonify({"error": "Failed to check registration"}), 500


@event_bp.route("/events/<event_id>/register", methods=["POST"])
@jwt_required()
def register_for_event(event_id):
    auth = current_auth()
    try:
        registration = RegistrationService.register_for_event(
            event_id, auth.user_id, request.get_json(silent=True)
        )
        return jsonify(registration.to_dict()), 201
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(
            f"Unexpected error registering user {auth.user_id} for event {event_id}: {str(e)}"
        )
        return jsonify({"error": "Failed to register for event"}), 500


@event_bp.route("/events/<event_id>/registrations", methods=["GET"])
@admin_required
def get_event_registrations(event_id):
    try:
        registrations = RegistrationService.get_event_registrations(
            event_id, current_auth().user_id
        )
        return jsonify([r.to_dict() for r in registrations]), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error fetching registrations for {event_id}: {str(e)}")
        return jsonify({"error": "Failed to fetch registrations"}), 500
