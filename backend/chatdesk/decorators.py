# Overview: Request decorators for API routes.

from functools import wraps
from flask import request, jsonify, g, current_app

from .services import session_service


def require_auth(f):
    """
    Require a valid user token.

    Sets g.current_user to the User owning the token.

    Returns 401 if the Authorization header is missing or blank, and 403 if
    the token does not belong to any user. The token is re-resolved against
    the database on every request.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = session_service.extract_token(request.headers.get("Authorization"))

        if not token:
            return jsonify({"error": "Authorization required"}), 401

        user = session_service.resolve_token(token)

        if not user:
            current_app.logger.warning(
                "Rejected unknown token on %s %s from %s",
                request.method, request.path, request.remote_addr,
            )
            return jsonify({"error": "Invalid token"}), 403

        g.current_user = user

        return f(*args, **kwargs)

    return decorated_function
