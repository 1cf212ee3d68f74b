from __future__ import annotations

from flask import Blueprint, jsonify, request, g

from ..decorators import require_auth
from ..services import message_service
from ..validation import ServiceError, get_json_payload

messages_bp = Blueprint("messages", __name__, url_prefix="/api")


@messages_bp.route("/messages", methods=["GET"])
@require_auth
def list_messages():
    return jsonify([m.to_dict() for m in message_service.list_recent()])


@messages_bp.route("/messages", methods=["POST"])
@require_auth
def send_message():
    data = get_json_payload(request)
    try:
        message = message_service.append(g.current_user, data.get("text"))
    except ServiceError as e:
        return jsonify({"error": e.message}), e.status_code
    return jsonify({"messageId": message.id, "message": "Message sent"}), 201


@messages_bp.route("/migrate", methods=["POST"])
@require_auth
def migrate_messages():
    """Import chat history kept in browser storage by older clients."""
    data = get_json_payload(request)
    try:
        count = message_service.import_legacy(g.current_user, data.get("oldMessages"))
    except ServiceError as e:
        return jsonify({"error": e.message}), e.status_code
    return jsonify({"migrated": count, "message": f"Migrated {count} messages"})
