import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from election_hub.extensions import db

log = logging.getLogger(__name__)


class ElectionHubError(Exception):
    """Base class for errors the caller can recover from."""

    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"ok": False, "error": self.message}


class NotFoundError(ElectionHubError):
    status_code = 404


class InvalidStateError(ElectionHubError):
    """Operation not permitted while the election is in its current status."""

    status_code = 400


class ConflictError(ElectionHubError):
    status_code = 409


class ValidationError(ElectionHubError):
    status_code = 422


def error_response(message, status_code):
    return jsonify({"ok": False, "error": message}), status_code


def register_error_handlers(app):
    @app.errorhandler(ElectionHubError)
    def handle_election_hub_error(exc):
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(exc):
        db.session.rollback()
        log.error("Unexpected storage failure", exc_info=exc)
        return error_response("Internal server error", 500)

    @app.errorhandler(404)
    def handle_not_found(exc):
        return error_response("Not found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(exc):
        return error_response("Method not allowed", 405)
