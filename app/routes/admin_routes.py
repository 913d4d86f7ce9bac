from flask import Blueprint, current_app, jsonify, request

from app.exceptions import AppError
from app.services import AdminService, EventService
from app.utils.auth import admin_required, current_auth

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/admin/stats", methods=["GET"])
@admin_required
def get_stats():
    """Dashboard statistics for the calling organizer"""
    try:
        stats = AdminService.get_stats(current_auth().user_id)
        return jsonify(stats), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching admin stats: {str(e)}")
        return jsonify({"error": "Failed to fetch stats"}), 500


@admin_bp.route("/admin/events", methods=["GET"])
@admin_required
def get_organizer_events():
    try:
        events = EventService.get_events_for_organizer(current_auth().user_id)
        return jsonify([event.to_dict() for event in events]), 200
    except Exception as e:
        current_app.logger.error(f"Error fetching admin events: {str(e)}")
        return jsonify({"error": "Failed to fetch events"}), 500


@admin_bp.route("/admin/events", methods=["POST"])
@admin_required
def create_event():
    try:
        event = EventService.create_event(
            request.get_json(silent=True), current_auth().user_id
        )
        return jsonify(event.to_dict()), 201
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error creating event: {str(e)}")
        return jsonify({"error": "Failed to create event"}), 500


@admin_bp.route("/admin/events/<event_id>", methods=["PATCH"])
@admin_required
def update_event(event_id):
    try:
        event = EventService.update_event(
            event_id, request.get_json(silent=True), current_auth().user_id
        )
        return jsonify(event.to_dict()), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error updating event {event_id}: {str(e)}")
        return jsonify({"error": "Failed to update event"}), 500


@admin_bp.route("/admin/events/<event_id>", methods=["DELETE"])
@admin_required
def delete_event(event_id):
    try:
        EventService.delete_event(event_id, current_auth().user_id)
        return jsonify({"message": "Event deleted successfully"}), 200
    except AppError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        current_app.logger.error(f"Error deleting event {event_id}: {str(e)}")
        return jsonify({"error": "Failed to delete event"}), 500
