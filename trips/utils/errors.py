from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException


class ErrorCodes:
    BAD_REQUEST = 'BAD_REQUEST'
    UNAUTHORIZED = 'UNAUTHORIZED'
    TOKEN_EXPIRED = 'TOKEN_EXPIRED'
    FORBIDDEN = 'FORBIDDEN'
    NOT_FOUND = 'NOT_FOUND'
    METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
    INTERNAL_SERVER_ERROR = 'INTERNAL_SERVER_ERROR'
    CLEANUP_DEPTH_EXCEEDED = 'CLEANUP_DEPTH_EXCEEDED'


# Codes used when werkzeug raises the HTTP error for us (abort, 404, 405...)
_CODES_BY_STATUS = {
    400: ErrorCodes.BAD_REQUEST,
    401: ErrorCodes.UNAUTHORIZED,
    403: ErrorCodes.FORBIDDEN,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
}


class AppError(Exception):
    """An error that carries its own API error code and HTTP status."""

    def __init__(self, code, message, status_code=500):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code


class CleanupDepthError(AppError):
    """Raised when a document tree is nested deeper than the cleanup limit."""

    def __init__(self, collection_path, max_depth):
        super().__init__(
            ErrorCodes.CLEANUP_DEPTH_EXCEEDED,
            f"Collection '{collection_path}' is nested deeper than the maximum cleanup depth of {max_depth}.",
        )
        self.collection_path = collection_path
        self.max_depth = max_depth


def error_response(code, message, status_code):
    return jsonify({"error": code, "message": message}), status_code


def register_error_handlers(app):
    """Render AppError and werkzeug HTTP errors as {"error", "message"} JSON."""

    @app.errorhandler(AppError)
    def handle_app_error(e):
        if e.status_code >= 500:
            current_app.logger.error(f"{e.code}: {e.message}")
        return error_response(e.code, e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        code = _CODES_BY_STATUS.get(e.code) or e.name.upper().replace(' ', '_')
        return error_response(code, e.description, e.code)

    return app
