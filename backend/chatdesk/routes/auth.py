# Overview: Flask API routes for registration, login and identity.

"""
Authentication API routes

The token returned by register/login is the client's permanent credential.
It must be sent as the Authorization header value on protected routes.
`userKey` mirrors `token` for the existing browser scripts.
"""

from flask import Blueprint, request, jsonify, current_app, g

from ..services import auth_service
from ..validation import ServiceError, get_json_payload
from ..decorators import require_auth


auth_bp = Blueprint("auth", __name__, url_prefix="/api")


@auth_bp.post("/register")
def register_route():
    data = get_json_payload(request)

    try:
        user = auth_service.register(data.get("username"), data.get("password"))
    except ServiceError as e:
        current_app.logger.info("Registration rejected: %s", e.message)
        return jsonify({"error": e.message}), e.status_code

    return jsonify({
        "token": user.token,
        "userKey": user.token,
        "message": "Registration successful",
    }), 200


@auth_bp.post("/login")
def login_route():
    """
    Check credentials and return the user's existing token.

    Unknown username and wrong password answer identically.
    """
    data = get_json_payload(request)
    username = data.get("username")

    try:
        user = auth_service.authenticate(username, data.get("password"))
    except ServiceError as e:
        current_app.logger.warning("Failed login for %r from %s", username, request.remote_addr)
        return jsonify({"error": e.message}), e.status_code

    current_app.logger.info("Login successful for %s", user.username)
    return jsonify({
        "token": user.token,
        "userKey": user.token,
        "username": user.username,
        "message": "Login successful",
    }), 200


@auth_bp.get("/user")
@require_auth
def whoami_route():
    user = g.current_user
    return jsonify({
        "username": user.username,
        "token": user.token,
        "userKey": user.token,
    })
