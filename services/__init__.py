"""Business logic for authentication and pacts."""

from .auth_service import (
    AuthService,
    LoginResult,
    LoginStatus,
    RegistrationResult,
    VerificationStatus,
)
from .errors import (
    ConflictError,
    DeliveryError,
    NotFoundError,
    SelfReferenceError,
    ServiceError,
    ValidationError,
)
from .pact_service import PactService

__all__ = [
    "AuthService",
    "LoginResult",
    "LoginStatus",
    "RegistrationResult",
    "VerificationStatus",
    "PactService",
    "ServiceError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "SelfReferenceError",
    "DeliveryError",
]
