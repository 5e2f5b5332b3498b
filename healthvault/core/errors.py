"""Error taxonomy shared by storage, dependencies and handlers.

Each error carries the HTTP status it maps to and a message that is safe to
show to the client. Internal detail belongs in the log, never in ``message``.
"""


class AppError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class ConflictError(AppError):
    status_code = 400
    default_message = "Resource already exists"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Access token required"


class Forbidden(AppError):
    status_code = 403
    default_message = "Invalid or expired token"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


class StorageError(InternalError):
    default_message = "Storage operation failed"


class ConfigurationError(InternalError):
    default_message = "Invalid configuration"
