class MehendiError(Exception):
    """Base class for every failure surfaced to an admin or public action."""

    status_code = 500

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class ValidationError(MehendiError):
    status_code = 400


class AuthorizationError(MehendiError):
    status_code = 403


class NotFoundError(MehendiError):
    status_code = 404


class ConflictError(MehendiError):
    status_code = 409


class OperationInProgressError(ConflictError):
    pass


class StorageError(MehendiError):
    status_code = 502


class DatabaseError(MehendiError):
    status_code = 502


class ConfigurationError(MehendiError):
    status_code = 503


def create_error_response(error):
    """Build the JSON envelope for a failed request."""
    body = {
        "success": False,
        "data": None,
        "error": error.message,
    }
    if error.errors:
        body["errors"] = error.errors
    return body


def create_success_response(data):
    return {
        "success": True,
        "data": data,
        "error": None,
    }
