"""
Domain exceptions for the yacht charter backend.

These exceptions represent business domain errors and are converted to HTTP responses
by the exception handler middleware. Services raise them; they never build HTTP
responses themselves.
"""

from typing import Dict, Optional

from sqlalchemy.exc import (
    DBAPIError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)


class DomainException(Exception):
    """Root of every error the charter services raise on purpose."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class EntityNotFoundError(DomainException):
    """A yacht, option, catalog item, promotion, booking or cart line is missing."""

    def __init__(
        self,
        entity_name: str,
        entity_id: Optional[int] = None,
        field_name: Optional[str] = None,
    ):
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.field_name = field_name

        if entity_id is not None:
            message = f"{entity_name} with id {entity_id} not found"
        else:
            message = f"{entity_name} not found"

        super().__init__(message, {"entity_name": entity_name, "entity_id": entity_id})


class AuthenticationError(DomainException):
    """Raised when a request carries no usable access token."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AccessDeniedError(DomainException):
    """The caller is signed in but lacks the admin role."""

    def __init__(self, required_role: str, current_role: Optional[str] = None):
        self.required_role = required_role
        self.current_role = current_role

        message = f"{required_role} role required"
        if current_role:
            message += f", but current role is {current_role}"

        super().__init__(
            message, {"required_role": required_role, "current_role": current_role}
        )


class ValidationError(DomainException):
    """A single value is outside what can be booked or sold (hours, minutes, dates).

    ``message`` is the English text for logs; ``key`` and ``params`` pick the
    text the caller sees from the i18n catalogue.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        key: str = "invalid_value",
        params: Optional[dict] = None,
    ):
        self.field = field
        self.value = value
        self.key = key
        self.params = params or {}
        super().__init__(message, {"field": field, "value": value})


class FieldValidationError(ValidationError):
    """Raised when a submitted form fails validation on one or more fields.

    ``field_errors`` maps each offending field to exactly one human-readable
    message in the caller's language.
    """

    def __init__(self, field_errors: Dict[str, str], message: str = "Invalid input"):
        self.field_errors = dict(field_errors)
        super().__init__(message)
        self.details = {"field_errors": self.field_errors}


class ConflictError(DomainException):
    """The write clashes with existing rows, e.g. deleting a yacht that has bookings."""

    def __init__(
        self,
        message: str,
        conflicting_entity: Optional[str] = None,
        key: str = "conflict",
        params: Optional[dict] = None,
    ):
        self.conflicting_entity = conflicting_entity
        self.key = key
        self.params = params or {}
        super().__init__(message, {"conflicting_entity": conflicting_entity})


class BusinessRuleViolationError(DomainException):
    """A rule with a name blocks the request; known rule names have localized messages."""

    def __init__(self, rule_name: str, message: str, context: Optional[dict] = None):
        self.rule_name = rule_name
        super().__init__(message, {"rule_name": rule_name, **(context or {})})


class BackendError(DomainException):
    """Raised when a database read or write fails.

    ``transient`` marks failures that are likely to succeed if the caller tries
    again later (lost connection, pool timeout). Nothing retries automatically.
    """

    def __init__(self, message: str, operation: str, transient: bool = False):
        self.operation = operation
        self.transient = transient
        super().__init__(message, {"operation": operation, "retryable": transient})

    @classmethod
    def from_exception(cls, exc: SQLAlchemyError, operation: str) -> "BackendError":
        return cls(str(exc), operation, transient=is_transient_failure(exc))


def is_transient_failure(exc: SQLAlchemyError) -> bool:
    """Tell connection-level failures apart from permanent ones like constraint violations."""
    if isinstance(exc, (OperationalError, InterfaceError, PoolTimeoutError)):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return False
