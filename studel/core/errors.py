"""
Typed failures raised by the ordering services.

Every error is recoverable from the caller's point of view: the HTTP layer maps
each kind to a status code and a user-facing message (see exception_handlers).
"""


class StudelError(Exception):
    code = "studel_error"
    default_message = "Request could not be completed."

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(StudelError):
    """Referenced order, user, product, vendor or zone does not exist."""
    code = "not_found"
    default_message = "Could not find the requested record. Refresh and try again."


class StateConflict(StudelError):
    """The transition's required starting state no longer matches the order."""
    code = "state_conflict"
    default_message = "This order has already changed. Refresh the view and try again."


class AuthorizationDenied(StudelError):
    """Caller's role or ownership does not permit the operation."""
    code = "authorization_denied"
    default_message = "You are not allowed to perform this action."


class ValidationFailed(StudelError):
    """Malformed input, rejected before any persistence call."""
    code = "validation_error"
    default_message = "Invalid input."
