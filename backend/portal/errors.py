"""Typed failures raised by the services and rendered by the API layer."""


class PortalError(Exception):
    """Base class; carries the HTTP status and the user-visible message."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(PortalError):
    status_code = 401
    default_message = "Invalid credentials"


class Unauthorized(PortalError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(PortalError):
    status_code = 403
    default_message = "Admin access required"


class ConflictError(PortalError):
    status_code = 400
    default_message = "Username or badge number already exists"


class NotFoundError(PortalError):
    status_code = 404
    default_message = "Moderator not found"


class InternalError(PortalError):
    pass
