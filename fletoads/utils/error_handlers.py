from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from .logger import Log


# Handle PermissionError
def handle_permission_error(error):
    response = {
        "success": False,
        "error": "PermissionError",
        "message": str(error),
        "status_code": 403,
    }
    return jsonify(response), 403


# Handle ValidationError
def handle_validation_error(error):
    response = {
        "success": False,
        "error": "Validation Error",
        "message": error.messages,
        "status_code": 400,
    }
    return jsonify(response), 400


def handle_plan_limit_error(error):
    response = {
        "success": False,
        "error": error.code,
        "message": error.message,
        "errors": error.meta,
        "status_code": 403,
    }
    return jsonify(response), 403


def handle_rate_limit(e):
    # e.description contains whatever you passed as error_message=
    return jsonify({
        "success": False,
        "status_code": 429,
        "error": "Too Many Requests",
        "message": e.description or "Too many requests, please try again later."
    }), 429


def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return error

    Log.error(f"[error_handlers.py][unexpected][{request.method} {request.path}] {error!r}")
    return jsonify({
        "success": False,
        "status_code": 500,
        "error": "Internal Server Error",
        "message": "An unexpected error occurred. Please try again later.",
    }), 500
