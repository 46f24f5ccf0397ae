"""
Error taxonomy for the design lifecycle services.

Every error carries a ``message`` that is safe to show to the user. Views map
the class to an HTTP status through ``common.responses.error_response``;
services never build responses themselves.
"""


class LifecycleError(Exception):
    """Base class; message is safe to show to user."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(LifecycleError):
    """Bad input shape or a violated submission constraint."""
    pass


class AuthError(LifecycleError):
    """No authenticated identity on the request."""

    status_code = 401


class InsufficientRoleError(LifecycleError):
    """Identity present but its profile role may not perform the action."""

    status_code = 403


class NotFoundError(LifecycleError):
    """Referenced entity absent or filtered out by ownership."""

    status_code = 404


class ConflictError(LifecycleError):
    status_code = 409


class CapacityError(LifecycleError):
    status_code = 409


class PolicyError(LifecycleError):
    """Business rule violation, e.g. one active project per person."""

    status_code = 409


class InvalidTransitionError(LifecycleError):
    status_code = 409


class InfrastructureError(LifecycleError):
    """
    Database or identity collaborator unreachable or misconfigured.

    ``message`` stays generic; the underlying exception is kept on ``cause``
    for logging only.
    """

    status_code = 503
    GENERIC_MESSAGE = "Something went wrong on our side. Please try again later."

    def __init__(self, message: str = None, cause: Exception = None):
        self.cause = cause
        super().__init__(message or self.GENERIC_MESSAGE)
