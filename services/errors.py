"""Error taxonomy raised by the service layer."""

from __future__ import annotations

from http import HTTPStatus


class ServiceError(Exception):
    """Base class for failures a caller can act on."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "The request could not be completed."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Malformed or missing input."""

    default_message = "Please enter all fields."


class ConflictError(ServiceError):
    """A uniqueness rule would be violated."""

    status_code = HTTPStatus.CONFLICT
    default_message = "Resource already exists."


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = "User not found."


class SelfReferenceError(ServiceError):
    """The target of an operation is the caller."""

    default_message = "You cannot add yourself to your pact."


class DeliveryError(ServiceError):
    """The outbound email could not be sent."""

    status_code = HTTPStatus.BAD_GATEWAY
    default_message = "The verification email could not be sent."
