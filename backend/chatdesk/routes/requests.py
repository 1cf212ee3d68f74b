from __future__ import annotations

from flask import Blueprint, jsonify, request, g

from ..decorators import require_auth
from ..services import request_service
from ..validation import ServiceError, get_json_payload

requests_bp = Blueprint("requests", __name__, url_prefix="/api")


@requests_bp.route("/requests", methods=["GET"])
@require_auth
def list_requests():
    return jsonify([r.to_dict() for r in request_service.list_all()])


@requests_bp.route("/my-requests", methods=["GET"])
@require_auth
def list_my_requests():
    return jsonify([r.to_dict() for r in request_service.list_for_owner(g.current_user)])


@requests_bp.route("/requests", methods=["POST"])
@require_auth
def create_request():
    data = get_json_payload(request)
    try:
        req = request_service.create(
            g.current_user,
            data.get("title"),
            data.get("description"),
            data.get("priority"),
        )
    except ServiceError as e:
        return jsonify({"error": e.message}), e.status_code
    return jsonify({"requestId": req.id, "message": "Request created"}), 201


@requests_bp.route("/requests/<int:request_id>", methods=["DELETE"])
@require_auth
def delete_request(request_id: int):
    try:
        request_service.delete(g.current_user, request_id)
    except ServiceError as e:
        return jsonify({"error": e.message}), e.status_code
    return jsonify({"message": "Request deleted"})


@requests_bp.route("/requests/<int:request_id>/status", methods=["PATCH"])
@require_auth
def update_request_status(request_id: int):
    # Any authenticated user may change status; there is no role model.
    data = get_json_payload(request)
    try:
        req = request_service.update_status(request_id, data.get("status"))
    except ServiceError as e:
        return jsonify({"error": e.message}), e.status_code
    return jsonify({"message": "Status updated", "request": req.to_dict()})
