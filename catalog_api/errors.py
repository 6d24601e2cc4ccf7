"""
Service-level exceptions.

Services raise these; the application factory renders each one as a JSON
envelope using its ``status_code``.
"""


class ServiceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"success": False, "message": self.message, "error": type(self).__name__}


class ValidationError(ServiceError):
    """One or more fields are missing, malformed or out of range."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self):
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidId(ServiceError):
    status_code = 400
    default_message = "Invalid ID format"


class InvalidArgument(ServiceError):
    status_code = 400
    default_message = "Invalid argument"


class InsufficientFunds(ServiceError):
    status_code = 400
    default_message = "Insufficient balance"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class DuplicateKey(ServiceError):
    status_code = 409
    default_message = "Duplicate key"


class PersistenceUnavailable(ServiceError):
    status_code = 503
    default_message = "Database unavailable"
